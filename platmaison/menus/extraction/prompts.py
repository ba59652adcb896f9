"""Prompt asking a model to turn a recipe page or text into JSON."""

from __future__ import annotations

_HEADER = """\
You are an expert recipe parsing assistant. Find the main recipe in the
source below and extract its key details into a clean JSON object.
"""

_URL_SOURCE = """\
URL to parse: {url}
If the URL contains '#:~:text', it points at the part of the page where the
ingredients are listed; look for them there.
For a YouTube video, use the transcript found in the page HTML.
"""

_TEXT_SOURCE = """\
Recipe text to parse:
------
{text}
------
"""

_INSTRUCTIONS = """\
Extraction strategy:
1. Find the recipe card. Ignore introductory stories, comments and sidebars
   linking to other recipes.
2. Extract the recipe name, the full text of the instructions, the serving
   quantity (as a number) and the dish type (e.g. "Main Course", "Dessert",
   "Side Dish").
3. For each ingredient line, extract its name and amount.
   - The name is the base ingredient ("long grain white rice" -> "white rice",
     "black pepper" -> "pepper").
   - The amount is the numeric quantity ("1 1/2 cups chicken broth" -> 1.5).
     If no number is given ("salt to taste"), use 1.

Output requirements:
- Return ONLY a single JSON object, without surrounding text or markdown.
- Omit any field whose value cannot be found.
- Use exactly this structure:

{
  "name": "The Exact Recipe Name",
  "instructions": "1. First step from the recipe. 2. Second step from the recipe.",
  "servingQuantity": 8,
  "dishType": "Main Course",
  "ingredients": [
    { "name": "chicken breasts", "amount": 1.5 },
    { "name": "olive oil", "amount": 1 },
    { "name": "salt", "amount": 0.5 }
  ]
}
"""


def is_url(source: str) -> bool:
    return source.strip().lower().startswith(("http://", "https://"))


def build_pull_recipe_prompt(source: str) -> str:
    """Build the extraction prompt for a recipe URL or raw recipe text."""
    if is_url(source):
        body = _URL_SOURCE.format(url=source.strip())
    else:
        body = _TEXT_SOURCE.format(text=source.strip())
    return "\n".join([_HEADER, body, _INSTRUCTIONS])

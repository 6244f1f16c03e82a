"""
Static lookup tables for ingredient parsing and categorization.

Everything here is read-only data; the parsing modules import these tables
rather than defining their own word lists.
"""

from ..models.recipe import GroceryCategory


# Unit synonym -> canonical (plural) unit
UNIT_SYNONYMS = {
    # Volume
    "t": "teaspoons", "ts": "teaspoons", "tsp": "teaspoons", "tsps": "teaspoons",
    "teaspoon": "teaspoons", "teaspoons": "teaspoons",
    "tb": "tablespoons", "tbs": "tablespoons", "tbsp": "tablespoons", "tbsps": "tablespoons",
    "tablespoon": "tablespoons", "tablespoons": "tablespoons",
    "c": "cups", "cup": "cups", "cups": "cups",
    "pt": "pints", "pint": "pints", "pints": "pints",
    "qt": "quarts", "quart": "quarts", "quarts": "quarts",
    "gal": "gallons", "gallon": "gallons", "gallons": "gallons",
    "ml": "milliliters", "milliliter": "milliliters", "milliliters": "milliliters",
    "millilitre": "milliliters", "millilitres": "milliliters",
    "l": "liters", "liter": "liters", "liters": "liters", "litre": "liters", "litres": "liters",
    # Weight
    "oz": "ounces", "ounce": "ounces", "ounces": "ounces",
    "fl oz": "fluid ounces", "fluid ounce": "fluid ounces", "fluid ounces": "fluid ounces",
    "lb": "pounds", "lbs": "pounds", "pound": "pounds", "pounds": "pounds",
    "g": "grams", "gram": "grams", "grams": "grams",
    "kg": "kilograms", "kilogram": "kilograms", "kilograms": "kilograms",
    # Count / container
    "clove": "cloves", "cloves": "cloves",
    "slice": "slices", "slices": "slices",
    "can": "cans", "cans": "cans",
    "jar": "jars", "jars": "jars",
    "bottle": "bottles", "bottles": "bottles",
    "package": "packages", "packages": "packages", "pkg": "packages",
    "container": "containers", "containers": "containers",
    "bag": "bags", "bags": "bags",
    "bunch": "bunches", "bunches": "bunches",
    "head": "heads", "heads": "heads",
    "piece": "pieces", "pieces": "pieces",
    "leaf": "leaves", "leaves": "leaves",
    "sprig": "sprigs", "sprigs": "sprigs",
    "stalk": "stalks", "stalks": "stalks",
    "stick": "sticks", "sticks": "sticks",
    "pinch": "pinches", "pinches": "pinches",
    "dash": "dashes", "dashes": "dashes",
    # Size words act as count units ("3 large eggs")
    "small": "small", "medium": "medium", "large": "large",
    "extra large": "extra large", "extra-large": "extra large", "xl": "extra large",
}

# Canonical unit -> singular form used when amount == 1
SINGULAR_UNITS = {
    "teaspoons": "teaspoon", "tablespoons": "tablespoon", "cups": "cup",
    "pints": "pint", "quarts": "quart", "gallons": "gallon",
    "milliliters": "milliliter", "liters": "liter",
    "ounces": "ounce", "fluid ounces": "fluid ounce", "pounds": "pound", "grams": "gram", "kilograms": "kilogram",
    "cloves": "clove", "slices": "slice", "cans": "can", "jars": "jar",
    "bottles": "bottle", "packages": "package", "containers": "container",
    "bags": "bag", "bunches": "bunch", "heads": "head", "pieces": "piece",
    "leaves": "leaf", "sprigs": "sprig", "stalks": "stalk", "sticks": "stick",
    "pinches": "pinch", "dashes": "dash",
}

# Units for which a fractional Produce amount is rounded up to 1
COUNT_LIKE_UNITS = {
    "", "piece", "pieces", "small", "medium", "large", "extra large",
    "head", "heads", "bunch", "bunches", "clove", "cloves",
    "sprig", "sprigs", "leaf", "leaves",
}

# Unit vocabulary recognised by the generic measurement rule, longest first
UNIT_WORDS = sorted(
    [unit for unit in UNIT_SYNONYMS if unit not in ("t", "c")],
    key=len,
    reverse=True
)

CONTAINER_WORDS = ["can", "jar", "bottle", "package", "container", "bag", "box", "carton", "tub", "piece"]

# Spelled-out counts
NUMBER_WORDS = {
    "a": 1, "an": 1, "one": 1, "two": 2, "three": 3, "four": 4, "five": 5, "six": 6,
    "seven": 7, "eight": 8, "nine": 9, "ten": 10, "eleven": 11, "twelve": 12,
}

UNICODE_FRACTIONS = {
    "½": "1/2", "¼": "1/4", "¾": "3/4", "⅓": "1/3", "⅔": "2/3",
    "⅛": "1/8", "⅜": "3/8", "⅝": "5/8", "⅞": "7/8", "⅕": "1/5",
    "⅖": "2/5", "⅗": "3/5", "⅘": "4/5", "⅙": "1/6", "⅚": "5/6",
    "⅐": "1/7", "⅑": "1/9", "⅒": "1/10",
}

HERBS = [
    "basil", "mint", "parsley", "cilantro", "coriander", "tarragon", "dill",
    "thyme", "rosemary", "sage", "oregano", "chives",
]

CITRUS_FRUITS = ["lemon", "lime", "orange", "grapefruit"]

# Salt / pepper family names that default to "To taste" without a measurement
SEASONING_NAMES = {
    "salt", "sea salt", "kosher salt", "table salt",
    "black pepper", "white pepper", "pepper",
    "red pepper flakes", "chili flakes", "chile flakes",
}

BRAND_PATTERNS = [
    r"\bdiamond\s+crystal\b",
    r"\bmorton(?:'s)?\b",
]

# Words kept in names because they describe the product rather than an action
PRESERVED_WORDS = {
    "fresh", "frozen", "whipped", "pitted", "salted", "unsalted",
    "sweet", "sour", "bitter", "spicy", "hot", "mild", "extra", "virgin",
}

# Preparation verbs removed wherever they occur in a name
PREPARATION_VERBS = [
    "chopped", "sliced", "diced", "minced", "grated", "shredded", "torn",
    "julienned", "zested", "cubed", "mashed", "pureed", "puréed", "whipped",
    "beaten", "crushed", "halved", "quartered", "drained", "rinsed",
    "patted dry", "cleaned", "deveined", "shucked", "scaled", "gutted",
    "trimmed", "peeled", "seeded", "stemmed", "cored", "softened", "melted",
    "thawed", "divided", "sifted", "packed",
]

PREPARATION_ADVERBS = [
    "very thinly", "finely", "roughly", "coarsely", "thinly", "thickly",
    "lightly", "well", "freshly", "loosely", "tightly", "firmly",
]

# Descriptor words dropped only at the start or end of a name
EDGE_DESCRIPTOR_WORDS = {
    "uncooked", "raw", "cooked", "roasted", "toasted", "warm", "cold",
    "chilled", "soft", "hard", "ripe", "unripe", "overripe",
    "large", "small", "medium", "jumbo", "baby", "mini", "regular", "xl",
    "organic", "natural", "pure", "premium", "gourmet", "homemade",
    "store-bought", "imported", "local", "seasonal", "quality", "best",
    "good", "finest", "authentic", "optional", "about", "approximately",
}

# Names that are nothing but a descriptor never win a comma split
BARE_DESCRIPTORS = {
    "fresh", "ripe", "quality", "summer", "small", "medium", "large",
    "extra large", "good", "good quality", "best quality", "organic",
    "optional", "cold", "warm", "room temperature", "softened",
}

# Trailing clause notes that never change what to buy
PURE_NOTE_PATTERN = (
    r"^(?:divided|plus\s+more.*|plus\s+extra.*|to\s+taste|as\s+needed|optional"
    r"|for\s+(?:serving|garnish|drizzling|dusting|the\s+.+)|or\s+.+|at\s+room\s+temperature"
    r"|room\s+temperature|if\s+needed|if\s+desired)$"
)

INTERIOR_LOWERCASE_WORDS = {"and", "or", "of", "with", "in", "on", "for", "to", "from"}

# Ordered overrides, first match wins; checked before keyword sets
CATEGORY_OVERRIDES = [
    # Oils
    ("olive oil", GroceryCategory.pantry),
    ("vegetable oil", GroceryCategory.pantry),
    ("canola oil", GroceryCategory.pantry),
    ("sesame oil", GroceryCategory.pantry),
    ("coconut oil", GroceryCategory.pantry),
    ("oil", GroceryCategory.pantry),
    # Spices that collide with produce keywords
    ("garlic powder", GroceryCategory.pantry),
    ("onion powder", GroceryCategory.pantry),
    ("ginger powder", GroceryCategory.pantry),
    ("ground ginger", GroceryCategory.pantry),
    ("cayenne pepper", GroceryCategory.pantry),
    ("cayenne", GroceryCategory.pantry),
    ("peppercorn", GroceryCategory.pantry),
    ("black pepper", GroceryCategory.pantry),
    ("white pepper", GroceryCategory.pantry),
    ("ground pepper", GroceryCategory.pantry),
    ("red pepper flakes", GroceryCategory.pantry),
    ("crushed red pepper", GroceryCategory.pantry),
    ("chili flakes", GroceryCategory.pantry),
    ("chile flakes", GroceryCategory.pantry),
    ("chili powder", GroceryCategory.pantry),
    ("dried mint", GroceryCategory.pantry),
    ("dried", GroceryCategory.pantry),
    ("salt", GroceryCategory.pantry),
    ("miso", GroceryCategory.pantry),
    ("vinegar", GroceryCategory.pantry),
    # Leaveners and mixes
    ("baking soda", GroceryCategory.pantry),
    ("baking powder", GroceryCategory.pantry),
    ("gelatin", GroceryCategory.pantry),
    ("jell-o", GroceryCategory.pantry),
    # Canned and jarred goods
    ("tomato paste", GroceryCategory.pantry),
    ("tomato sauce", GroceryCategory.pantry),
    ("canned", GroceryCategory.pantry),
    ("coconut milk", GroceryCategory.pantry),
    ("peanut butter", GroceryCategory.pantry),
    ("banana pepper rings", GroceryCategory.pantry),
    # Broths and stocks
    ("chicken stock", GroceryCategory.pantry),
    ("chicken broth", GroceryCategory.pantry),
    ("beef stock", GroceryCategory.pantry),
    ("beef broth", GroceryCategory.pantry),
    ("vegetable stock", GroceryCategory.pantry),
    ("vegetable broth", GroceryCategory.pantry),
    ("bone broth", GroceryCategory.pantry),
    ("stock", GroceryCategory.pantry),
    ("broth", GroceryCategory.pantry),
    # Dairy
    ("whipped topping", GroceryCategory.dairy),
    ("whipped cream", GroceryCategory.dairy),
    ("sour cream", GroceryCategory.dairy),
    ("ice cream", GroceryCategory.frozen),
    # Produce
    ("watermelon", GroceryCategory.produce),
    ("lemon juice", GroceryCategory.produce),
    ("lime juice", GroceryCategory.produce),
    ("orange juice", GroceryCategory.produce),
    ("grapefruit juice", GroceryCategory.produce),
    ("lemon zest", GroceryCategory.produce),
    ("lime zest", GroceryCategory.produce),
    ("orange zest", GroceryCategory.produce),
    ("grapefruit zest", GroceryCategory.produce),
    ("bell pepper", GroceryCategory.produce),
    # Spirits
    ("rum", GroceryCategory.beverages),
    ("vodka", GroceryCategory.beverages),
    ("gin", GroceryCategory.beverages),
    ("tequila", GroceryCategory.beverages),
    ("whiskey", GroceryCategory.beverages),
    ("bourbon", GroceryCategory.beverages),
    ("brandy", GroceryCategory.beverages),
    ("liqueur", GroceryCategory.beverages),
]

# Keyword sets, scanned in this order after the overrides
CATEGORY_KEYWORDS = {
    GroceryCategory.produce: [
        "apple", "banana", "lemon", "lime", "orange", "grapefruit", "lettuce",
        "onion", "scallion", "shallot", "leek", "garlic", "ginger", "tomato",
        "pepper", "jalapeño", "jalapeno", "chile", "chili", "cucumber", "spinach",
        "kale", "arugula", "cabbage", "broccoli", "cauliflower", "carrot", "celery",
        "potato", "zucchini", "squash", "eggplant", "mushroom", "avocado", "corn",
        "pea", "bean sprout", "radish", "beet", "fennel", "asparagus", "berry",
        "berries", "strawberry", "strawberries", "blueberry", "blueberries",
        "raspberry", "raspberries", "peach", "pear", "plum", "mango", "pineapple",
        "grape", "cherry", "cherries", "melon", "zest", "juice", "parsley",
        "mint", "chives", "basil", "cilantro", "coriander", "dill", "thyme",
        "rosemary", "sage", "oregano", "tarragon", "herb", "greens",
    ],
    GroceryCategory.meat_and_seafood: [
        "beef", "pork", "chicken", "turkey", "lamb", "veal", "bacon", "sausage",
        "steak", "sirloin", "ribeye", "rib-eye", "brisket", "tenderloin", "short rib", "chuck",
        "shrimp", "prawn", "salmon", "tuna", "cod", "halibut", "squid",
        "crab", "lobster", "scallop", "clam", "mussel", "anchovy", "anchovies", "fish",
    ],
    GroceryCategory.deli: [
        "ham", "salami", "prosciutto", "nduja", "'nduja", "pancetta", "pastrami",
        "mortadella", "chorizo",
    ],
    GroceryCategory.bakery: [
        "bread", "baguette", "bun", "roll", "tortilla", "pita", "brioche",
        "croissant", "naan", "sourdough",
    ],
    GroceryCategory.frozen: [
        "sorbet", "gelato", "popsicle", "ice pop", "puff pastry", "phyllo",
    ],
    GroceryCategory.pantry: [
        "flour", "sugar", "salt", "oil", "vinegar", "rice", "pasta", "noodle",
        "noodles", "spaghetti", "stock", "broth", "spice", "spices", "honey",
        "syrup", "vanilla", "cumin", "paprika", "cinnamon", "nutmeg", "turmeric",
        "mustard", "soy sauce", "fish sauce", "ketchup", "mayonnaise", "cornstarch",
        "yeast", "beans", "chickpeas", "lentils", "oats", "breadcrumbs", "panko",
        "almonds", "walnuts", "pecans", "nuts", "chocolate", "cocoa",
    ],
    GroceryCategory.dairy: [
        "milk", "butter", "cream", "cheese", "yogurt", "egg", "eggs", "parmesan",
        "mozzarella", "ricotta", "feta", "cheddar", "buttermilk",
    ],
    GroceryCategory.beverages: [
        "wine", "beer", "soda", "cocktail", "sparkling water", "club soda", "coffee", "tea",
    ],
}

# Hints that keep a "frozen ..." item out of the Frozen section
FROZEN_EXCEPTION_HINTS = ["yogurt", "milk", "cream", "juice", "drink", "beverage", "broth", "stock"]

# Units the LLM path accepts after standardization
VALID_LLM_UNITS = set(UNIT_SYNONYMS.values()) | set(SINGULAR_UNITS.values()) | {
    "", "To taste", "For serving", "to taste",
}

# Words that mark a name as page furniture rather than food
NON_INGREDIENT_NAME_WORDS = [
    "ingredient", "ingredients", "list", "item", "step", "direction", "directions",
    "instruction", "instructions", "recipe", "cook", "prep", "total", "time", "serving",
]

# Staples used as a confidence bonus signal
COMMON_STAPLES = ["salt", "pepper", "oil", "water", "flour", "sugar", "egg", "milk", "butter"]

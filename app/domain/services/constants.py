# Constants for the shop catalogue.
from app.domain.models.product import Category

# Ordered keyword rules for category detection; first match wins.
# Order matters: "Christmas Mug" is homewares because homewares is checked before christmas.
CATEGORY_KEYWORDS = [
    (Category.SHIRTS, ("tee", "t-shirt", "shirt", "tank", "top")),
    (Category.HOODIES, ("hoodie", "sweatshirt", "sweater", "pullover")),
    (Category.FOOTWEAR, ("shoe", "sneaker", "slide", "sandal", "footwear")),
    (Category.TOWELS, ("towel", "beach towel")),
    (Category.HOMEWARES, ("mug", "cushion", "pillow", "decor", "candle", "print", "poster")),
    (Category.ACCESSORIES, ("bag", "hat", "cap", "beanie", "accessory", "accessories")),
    (Category.CHRISTMAS, ("christmas", "xmas", "festive", "holiday", "santa")),
    (Category.COLOURING, ("colour", "coloring", "drawing", "art guide")),
    (Category.NOVELTY, ("puzzle", "proposal", "novelty", "funny")),
]
DEFAULT_CATEGORY = Category.OTHER

# Shop view
CATEGORY_ALL = "all"
# Seasonal labels never appear in the "all" tab ("seasonal" is kept for legacy links)
SEASONAL_CATEGORIES = {"christmas", "colouring", "novelty", "seasonal", "other"}
SHOP_TABS = [
    CATEGORY_ALL,
    Category.SHIRTS.value,
    Category.HOODIES.value,
    Category.FOOTWEAR.value,
    Category.TOWELS.value,
    Category.HOMEWARES.value,
    Category.ACCESSORIES.value,
]

# Printful
PRINTFUL_STORE_PRODUCTS_PATH = "/store/products"

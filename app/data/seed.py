# app/data/seed.py
import logging
from decimal import Decimal

from app.schemas.product import CategoryCreate, ProductCreate
from app.storage.base import Storage

logger = logging.getLogger(__name__)

IMAGE_BASE = "https://images.unsplash.com"

SAMPLE_CATEGORIES = [
    ("Electronics", "electronics", "photo-1511707171634-5f897ff02aa9"),
    ("Fashion", "fashion", "photo-1567401893414-76b7b1e5a7a5"),
    ("Home & Living", "home-living", "photo-1556228453-efd6c1ff04f6"),
    ("Beauty", "beauty", "photo-1571781926291-c477ebfd024b"),
    ("Sports & Outdoors", "sports-outdoors", "photo-1517649763962-0c623066013b"),
    ("Toys & Games", "toys-games", "photo-1558060370-d644479cb6f7"),
]

# (name, slug, description, price, sale_price, stock, category slug, is_new, image)
SAMPLE_PRODUCTS = [
    ("Wireless Headphones", "wireless-headphones", "High-quality wireless headphones with noise cancellation", "79.99", "59.99", 50, "electronics", False, "photo-1505740420928-5e560c06d30e"),
    ("Smart Watch", "smart-watch", "Advanced smartwatch with health tracking features", "149.99", None, 30, "electronics", False, "photo-1546868871-7041f2a55e12"),
    ("Smartphone Pro", "smartphone-pro", "Latest smartphone with advanced camera and long battery life", "899.99", None, 20, "electronics", False, "photo-1592899677977-9c10ca588bbd"),
    ("Wireless Earbuds", "wireless-earbuds", "Comfortable wireless earbuds with crystal clear sound", "59.99", None, 100, "electronics", True, "photo-1608156639585-b3a032ef9689"),
    ("Red Sneakers", "red-sneakers", "Stylish and comfortable red sneakers for everyday wear", "89.99", None, 45, "fashion", False, "photo-1542291026-7eec264c27ff"),
    ("Digital Camera", "digital-camera", "Professional digital camera with high resolution sensor", "599.99", "499.99", 15, "electronics", False, "photo-1516035069371-29a1b244cc32"),
    ("Laptop Pro", "laptop-pro", "Powerful laptop for professionals and creators", "1299.99", None, 10, "electronics", False, "photo-1496181133206-80ce9b88a853"),
    ("Travel Backpack", "travel-backpack", "Durable backpack with multiple compartments for travel", "99.99", "79.99", 60, "fashion", False, "photo-1553062407-98eeb64c6a62"),
    ("Bluetooth Speaker", "bluetooth-speaker", "Portable waterproof speaker with 20hr battery life", "129.99", "99.99", 35, "electronics", False, "photo-1572569511254-d8f925fe2cbb"),
    ("Fitness Tracker", "fitness-tracker", "Track steps, heart rate, and sleep patterns", "79.99", None, 40, "electronics", True, "photo-1585123388860-6e79dc0f6230"),
    ("Tablet", "tablet", "10-inch tablet with high-resolution display", "349.99", None, 18, "electronics", False, "photo-1546054454-aa26e2b734c7"),
    ("Leather Belt", "leather-belt", "Genuine leather belt with stainless steel buckle", "49.99", None, 55, "fashion", False, "photo-1591047139829-d91aecb6caea"),
    ("Winter Coat", "winter-coat", "Waterproof insulated coat for extreme cold", "199.99", "159.99", 25, "fashion", False, "photo-1520367445093-50dc08a59d9d"),
    ("Silk Scarf", "silk-scarf", "Luxury silk scarf with elegant pattern", "69.99", None, 30, "fashion", True, "photo-1594631252845-29fc4cc8cde9"),
    ("Non-Stick Pan Set", "non-stick-pan-set", "3-piece ceramic non-stick cookware set", "89.99", None, 22, "home-living", False, "photo-1583778176476-4a8b02b64e01"),
    ("Smart Lighting Kit", "smart-lighting-kit", "Color-changing LED bulbs with app control", "129.99", "99.99", 15, "home-living", False, "photo-1513506003901-1e6a229e616d"),
    ("Robot Vacuum", "robot-vacuum", "Self-charging robot vacuum with smart mapping", "399.99", None, 12, "home-living", True, "photo-1576618148400-f54bed99fcfd"),
    ("Electric Toothbrush", "electric-toothbrush", "Sonic toothbrush with 3 cleaning modes", "79.99", None, 40, "beauty", False, "photo-1607619056574-7b8d3ee536b2"),
    ("Hair Dryer", "hair-dryer", "Professional ionic hair dryer with diffuser", "59.99", "49.99", 28, "beauty", False, "photo-1522335789203-aabd1fc54bc9"),
    ("Makeup Mirror", "makeup-mirror", "LED vanity mirror with magnification", "89.99", None, 20, "beauty", True, "photo-1596462502278-27bfdc403348"),
    ("Camping Tent", "camping-tent", "4-person waterproof tent with rainfly", "199.99", None, 18, "sports-outdoors", False, "photo-1537905569824-f89f14cceb68"),
    ("Mountain Bike", "mountain-bike", "21-speed aluminum frame mountain bike", "599.99", "549.99", 8, "sports-outdoors", False, "photo-1485965120184-e220f721d03e"),
    ("Fitness Dumbbells", "fitness-dumbbells", "Adjustable weight set (5-25 lbs per dumbbell)", "149.99", None, 25, "sports-outdoors", True, "photo-1571019613454-1cb2f99b2d8b"),
    ("Drone with Camera", "drone-with-camera", "4K camera drone with 30min flight time", "299.99", None, 15, "toys-games", False, "photo-1579829366248-204fe8413f31"),
    ("Building Blocks Set", "building-blocks-set", "250-piece creative construction set", "39.99", "29.99", 50, "toys-games", False, "photo-1594787319145-948796f1369e"),
    ("RC Car", "rc-car", "1:10 scale remote control car with 2.4GHz controller", "89.99", None, 30, "toys-games", True, "photo-1589254065909-b7086229d08c"),
]


def seed_sample_data(storage: Storage) -> bool:
    """
    Create the sample catalog if the store has no categories yet.

    Returns True when data was written.
    """
    if storage.list_categories():
        return False

    category_ids: dict[str, int] = {}
    for name, slug, image in SAMPLE_CATEGORIES:
        category = storage.create_category(
            CategoryCreate(name=name, slug=slug, image_url=f"{IMAGE_BASE}/{image}")
        )
        category_ids[slug] = category.id

    for name, slug, description, price, sale_price, stock, category, is_new, image in SAMPLE_PRODUCTS:
        storage.create_product(
            ProductCreate(
                name=name,
                slug=slug,
                description=description,
                price=Decimal(price),
                image_url=f"{IMAGE_BASE}/{image}",
                stock=stock,
                category_id=category_ids[category],
                is_on_sale=sale_price is not None,
                sale_price=Decimal(sale_price) if sale_price else None,
                is_new=is_new,
            )
        )

    logger.info(
        f"Seeded {len(SAMPLE_CATEGORIES)} categories and {len(SAMPLE_PRODUCTS)} products"
    )
    return True

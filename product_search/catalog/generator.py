"""Synthetic product catalog generator."""

import json
import logging
import random
from collections import Counter
from pathlib import Path
from typing import Optional

import aiofiles

from ..models import Product

logger = logging.getLogger(__name__)

CATEGORIES: dict[str, dict[str, list[str]]] = {
    "Electronics": {
        "subcategories": ["Laptops", "Smartphones", "Tablets", "Smart Watches",
                          "Headphones", "Speakers", "Cameras", "Gaming Devices"],
        "brands": ["Apple", "Samsung", "Sony", "Dell", "HP", "Lenovo", "ASUS",
                   "Microsoft", "Google", "OnePlus", "Xiaomi", "Huawei"],
    },
    "Computer Components": {
        "subcategories": ["Processors", "Graphics Cards", "Memory", "Storage",
                          "Motherboards", "Power Supplies", "Cases", "Cooling"],
        "brands": ["Intel", "AMD", "NVIDIA", "Corsair", "ASUS", "MSI", "Gigabyte",
                   "Seagate", "Western Digital", "Samsung"],
    },
    "Home & Garden": {
        "subcategories": ["Kitchen Appliances", "Furniture", "Decor", "Tools",
                          "Outdoor", "Cleaning", "Storage", "Lighting"],
        "brands": ["KitchenAid", "Cuisinart", "IKEA", "Whirlpool", "Black+Decker",
                   "Dyson", "Philips", "GE", "Bosch"],
    },
    "Fashion": {
        "subcategories": ["Men's Clothing", "Women's Clothing", "Shoes", "Accessories",
                          "Jewelry", "Bags", "Watches", "Sunglasses"],
        "brands": ["Nike", "Adidas", "Levi's", "Calvin Klein", "Ralph Lauren", "Zara",
                   "H&M", "Gucci", "Prada", "Rolex"],
    },
    "Sports & Outdoors": {
        "subcategories": ["Fitness Equipment", "Athletic Wear", "Outdoor Gear", "Cycling",
                          "Swimming", "Team Sports", "Winter Sports", "Water Sports"],
        "brands": ["Nike", "Adidas", "Under Armour", "Patagonia", "The North Face",
                   "REI", "Specialized", "Trek", "Garmin"],
    },
    "Books & Media": {
        "subcategories": ["Fiction", "Non-Fiction", "Textbooks", "Children's Books",
                          "Comics", "Magazines", "DVDs", "Video Games"],
        "brands": ["Penguin", "Random House", "Marvel", "DC Comics", "PlayStation",
                   "Xbox", "Nintendo", "Steam"],
    },
    "Health & Beauty": {
        "subcategories": ["Skincare", "Makeup", "Hair Care", "Supplements",
                          "Personal Care", "Medical Devices", "Fitness", "Wellness"],
        "brands": ["L'Oreal", "Clinique", "Neutrogena", "Olay", "Revlon", "Maybelline",
                   "CeraVe", "Dove", "Johnson & Johnson"],
    },
    "Automotive": {
        "subcategories": ["Parts", "Accessories", "Tools", "Electronics", "Maintenance",
                          "Interior", "Exterior", "Performance"],
        "brands": ["Bosch", "Michelin", "Castrol", "3M", "Pioneer", "Garmin",
                   "WeatherTech", "K&N", "Mobil 1"],
    },
    "Toys & Games": {
        "subcategories": ["Action Figures", "Board Games", "Educational Toys",
                          "Electronic Toys", "Outdoor Toys", "Puzzles", "Dolls",
                          "Building Sets"],
        "brands": ["LEGO", "Mattel", "Hasbro", "Fisher-Price", "Nerf", "Barbie",
                   "Hot Wheels", "Monopoly", "Scrabble"],
    },
    "Pet Supplies": {
        "subcategories": ["Dog Supplies", "Cat Supplies", "Bird Supplies", "Fish Supplies",
                          "Small Animals", "Pet Food", "Toys", "Health"],
        "brands": ["Purina", "Hill's", "Royal Canin", "Blue Buffalo", "KONG", "Petco",
                   "PetSmart", "Whiskas", "Pedigree"],
    },
}

PRICE_RANGES: dict[str, tuple[float, float]] = {
    "Electronics": (99, 3999),
    "Computer Components": (49, 2499),
    "Home & Garden": (19, 1999),
    "Fashion": (15, 899),
    "Sports & Outdoors": (25, 1299),
    "Books & Media": (5, 199),
    "Health & Beauty": (8, 299),
    "Automotive": (15, 999),
    "Toys & Games": (10, 399),
    "Pet Supplies": (5, 199),
}

AVAILABILITY_OPTIONS = ["In Stock", "Limited Stock", "Out of Stock", "Pre-order", "Backorder"]

PRODUCT_TYPES: dict[str, list[str]] = {
    "Laptops": ["Pro", "Air", "Gaming", "Business", "Ultrabook", "Notebook", "Workstation"],
    "Smartphones": ["Pro", "Plus", "Max", "Mini", "Edge", "Note", "Pixel", "Galaxy"],
    "Tablets": ["Pro", "Air", "Mini", "Plus", "Tab", "Surface", "iPad"],
    "Headphones": ["Studio", "Pro", "Max", "Buds", "Wireless", "Gaming", "Sport"],
    "Graphics Cards": ["GeForce", "Radeon", "RTX", "GTX", "RX", "Pro"],
    "Processors": ["Core", "Ryzen", "Xeon", "Threadripper", "Celeron", "Athlon"],
    "Kitchen Appliances": ["Stand Mixer", "Blender", "Coffee Maker", "Toaster", "Microwave"],
    "Furniture": ["Sofa", "Chair", "Table", "Bed", "Desk", "Cabinet", "Bookshelf"],
}
DEFAULT_PRODUCT_TYPES = ["Pro", "Plus", "Standard", "Elite", "Premium"]
MODELS = ["X", "S", "Pro", "Max", "Ultra", "Plus", "Mini", "Lite"]

DESCRIPTIONS = [
    "Premium {sub} designed for professional use with cutting-edge technology.",
    "High-quality {sub} featuring advanced functionality and reliable performance.",
    "Innovative {sub} that combines style, performance and durability.",
    "Professional-grade {sub} engineered for demanding applications.",
    "State-of-the-art {sub} offering unmatched performance and user-friendly features.",
    "Award-winning {sub} known for its reliability and outstanding value.",
]

CATEGORY_TAGS: dict[str, list[str]] = {
    "Electronics": ["tech", "digital", "wireless", "smart", "portable", "premium"],
    "Computer Components": ["gaming", "performance", "high-end", "professional", "rgb"],
    "Home & Garden": ["home", "kitchen", "furniture", "decor", "appliance"],
    "Fashion": ["style", "trendy", "comfortable", "designer", "casual"],
    "Sports & Outdoors": ["fitness", "outdoor", "athletic", "adventure", "durable"],
    "Books & Media": ["entertainment", "educational", "bestseller", "classic"],
    "Health & Beauty": ["beauty", "skincare", "wellness", "organic", "natural"],
    "Automotive": ["car", "vehicle", "auto", "maintenance", "safety"],
    "Toys & Games": ["fun", "educational", "kids", "family", "creative"],
    "Pet Supplies": ["pet", "animal", "care", "healthy", "natural"],
}


def _specifications(rng: random.Random, subcategory: str) -> dict:
    """Category-specific specification map. Values are plain scalars."""
    if subcategory == "Laptops":
        return {
            "processor": rng.choice(["Intel Core i7", "Intel Core i5", "AMD Ryzen 7", "Apple M3"]),
            "memory": rng.choice(["8GB", "16GB", "32GB", "64GB"]),
            "storage": rng.choice(["256GB SSD", "512GB SSD", "1TB SSD", "2TB SSD"]),
            "display": f"{round(rng.uniform(13, 17), 1)}-inch "
                       f"{rng.choice(['FHD', '4K', 'Retina', 'OLED'])}",
            "battery_life": f"{rng.randint(8, 20)} hours",
        }
    if subcategory == "Smartphones":
        return {
            "processor": rng.choice(["Snapdragon 8 Gen 3", "A17 Pro", "Exynos 2400"]),
            "storage": rng.choice(["128GB", "256GB", "512GB", "1TB"]),
            "camera": f"{rng.randint(12, 200)}MP Main Camera",
            "battery": f"{rng.randint(3000, 5500)}mAh",
            "5g": True,
        }
    if subcategory == "Graphics Cards":
        return {
            "memory": f"{rng.choice([4, 6, 8, 12, 16, 24])}GB {rng.choice(['GDDR6', 'GDDR6X'])}",
            "boost_clock": f"{rng.randint(1500, 2800)} MHz",
            "cuda_cores": rng.randint(1024, 16384),
            "power_consumption": f"{rng.randint(150, 500)}W",
        }
    if subcategory == "Processors":
        return {
            "cores": rng.randint(4, 32),
            "threads": rng.randint(4, 64),
            "base_frequency": f"{round(rng.uniform(2.0, 4.0), 2)} GHz",
            "tdp": f"{rng.randint(35, 300)}W",
        }

    return {
        "dimensions": f"{round(rng.uniform(5, 50), 1)} x {round(rng.uniform(3, 30), 1)} "
                      f"x {round(rng.uniform(2, 20), 1)} inches",
        "weight": f"{round(rng.uniform(0.5, 25), 1)} lbs",
        "material": rng.choice(["Aluminum", "Plastic", "Steel", "Glass", "Wood"]),
        "color": rng.choice(["Black", "White", "Silver", "Gray", "Blue", "Red"]),
    }


def _tags(rng: random.Random, category: str, subcategory: str, brand: str) -> list[str]:
    tags = [category.lower(), "-".join(subcategory.lower().split()), brand.lower()]
    extra = CATEGORY_TAGS.get(category, ["quality", "reliable", "popular"])
    tags.extend(rng.sample(extra, min(len(extra), rng.randint(2, 4))))
    return tags


def generate_product(rng: random.Random, product_id: int) -> Product:
    """Generate a single random product."""
    category = rng.choice(list(CATEGORIES))
    subcategory = rng.choice(CATEGORIES[category]["subcategories"])
    brand = rng.choice(CATEGORIES[category]["brands"])

    kind = rng.choice(PRODUCT_TYPES.get(subcategory, DEFAULT_PRODUCT_TYPES))
    name = f"{brand} {kind} {rng.choice(MODELS)} {rng.randint(1, 20)}"
    min_price, max_price = PRICE_RANGES.get(category, (10, 500))

    return Product(
        id=str(product_id),
        name=name,
        description=rng.choice(DESCRIPTIONS).format(sub=subcategory.lower()),
        category=category,
        subcategory=subcategory,
        brand=brand,
        price=round(rng.uniform(min_price, max_price), 2),
        currency="USD",
        rating=round(rng.uniform(3.0, 5.0), 1),
        reviews_count=rng.randint(1, 10000),
        availability=rng.choice(AVAILABILITY_OPTIONS),
        specifications=_specifications(rng, subcategory),
        tags=_tags(rng, category, subcategory, brand),
        image_url=f"https://example.com/{'-'.join(name.lower().split())}.jpg",
    )


def generate_catalog(count: int = 1000, seed: Optional[int] = None) -> list[Product]:
    """Generate `count` products with IDs 1..count."""
    rng = random.Random(seed)
    products = []
    for i in range(1, count + 1):
        products.append(generate_product(rng, i))
        if i % 100 == 0:
            logger.info("Generated %d/%d products", i, count)
    return products


def catalog_stats(products: list[Product]) -> dict:
    """Per-category, per-brand, availability and price-band counts."""
    price_bands: Counter = Counter()
    for p in products:
        if p.price < 100:
            price_bands["under_100"] += 1
        elif p.price < 500:
            price_bands["100_500"] += 1
        elif p.price < 1000:
            price_bands["500_1000"] += 1
        else:
            price_bands["over_1000"] += 1

    return {
        "categories": dict(Counter(p.category for p in products).most_common()),
        "brands": dict(Counter(p.brand for p in products).most_common(10)),
        "availability": dict(Counter(p.availability for p in products)),
        "price_ranges": dict(price_bands),
    }


async def save_catalog(products: list[Product], path: str) -> Path:
    """Write products as a JSON array."""
    output_path = Path(path)
    output_path.parent.mkdir(parents=True, exist_ok=True)

    data = [p.model_dump() for p in products]
    async with aiofiles.open(output_path, "w", encoding="utf-8") as f:
        await f.write(json.dumps(data, indent=2, ensure_ascii=False))

    logger.info("Catalog written to %s", output_path)
    return output_path

"""
Seed data: the development sample set and the extended retail catalog.
"""

from datetime import datetime, timedelta, timezone
from decimal import Decimal
from typing import List, Optional

from bizassist.models.catalog import OrderCreate, OrderItem, OrderStatus, ProductCreate, ProductStatus


def sample_products(now: Optional[datetime] = None) -> List[ProductCreate]:
    """Three headphone products, one per stock status."""
    now = now or datetime.now(timezone.utc)
    return [
        ProductCreate(
            name="SoundWave Pro X",
            sku="WH-SWP-100",
            description="Premium wireless headphones with noise cancellation",
            price=Decimal("129.99"),
            quantity=24,
            status=ProductStatus.IN_STOCK,
            category="Electronics",
            reorder_point=10,
        ),
        ProductCreate(
            name="AudioPeak Max",
            sku="WH-APM-200",
            description="Wireless headphones with enhanced bass",
            price=Decimal("89.99"),
            quantity=3,
            status=ProductStatus.LOW_STOCK,
            category="Electronics",
            reorder_point=5,
        ),
        ProductCreate(
            name="BassBoost Elite",
            sku="WH-BBE-300",
            description="Premium bass-focused wireless headphones",
            price=Decimal("149.99"),
            quantity=0,
            status=ProductStatus.OUT_OF_STOCK,
            category="Electronics",
            reorder_point=5,
            next_restock=now + timedelta(days=5),
        ),
    ]


# Item product ids refer to sample_products() inserted first into an empty store
SAMPLE_ORDERS: List[OrderCreate] = [
    OrderCreate(
        order_number="38291",
        status=OrderStatus.COMPLETED,
        total=Decimal("124.95"),
        customer_name="John Doe",
        customer_email="john.doe@example.com",
        items=[OrderItem(product_id=1, quantity=1, price=Decimal("124.95"))],
    ),
    OrderCreate(
        order_number="38290",
        status=OrderStatus.PROCESSING,
        total=Decimal("89.99"),
        customer_name="Jane Smith",
        customer_email="jane.smith@example.com",
        items=[OrderItem(product_id=2, quantity=1, price=Decimal("89.99"))],
    ),
    OrderCreate(
        order_number="38289",
        status=OrderStatus.SHIPPED,
        total=Decimal("245.50"),
        customer_name="Bob Johnson",
        customer_email="bob.johnson@example.com",
        items=[
            OrderItem(product_id=3, quantity=1, price=Decimal("149.99")),
            OrderItem(product_id=2, quantity=1, price=Decimal("89.99")),
        ],
    ),
]


def _catalog_item(name, sku, description, price, quantity, category, reorder_point) -> ProductCreate:
    return ProductCreate(
        name=name,
        sku=sku,
        description=description,
        price=Decimal(price),
        quantity=quantity,
        status=ProductStatus.IN_STOCK,
        category=category,
        reorder_point=reorder_point,
    )


CATALOG_PRODUCTS: List[ProductCreate] = [
    _catalog_item("Samsung Galaxy A14", "SAM-GA14-KE",
                  "6.6-inch display, 50MP camera, 5000mAh battery, 4GB RAM", "19999.99", 25, "smartphones", 5),
    _catalog_item("Tecno Spark 10C", "TEC-SP10C-KE",
                  "6.6-inch HD+ display, 5000mAh battery, 4GB RAM, 128GB storage", "15999.00", 30, "smartphones", 7),
    _catalog_item("Xiaomi Redmi 12", "XMI-RD12-KE",
                  "6.79-inch FHD+ display, 50MP camera, 5000mAh battery, 8GB RAM", "22499.00", 15, "smartphones", 3),
    _catalog_item("OPPO A58", "OPPO-A58-KE",
                  "6.72-inch FHD+ display, 50MP camera, 5000mAh battery", "24999.00", 18, "smartphones", 4),
    _catalog_item("Infinix Hot 40i", "INF-H40I-KE",
                  "6.6-inch HD+ display, 50MP camera, 5000mAh battery, 4GB RAM", "16499.00", 22, "smartphones", 5),
    _catalog_item('LG 43" Smart TV', "LG-43SM-KE",
                  "43-inch Full HD Smart TV with webOS, HDR10, and virtual surround sound", "34999.00", 10,
                  "televisions", 2),
    _catalog_item('Hisense 32" HD TV', "HIS-32HD-KE",
                  "32-inch HD TV with USB multimedia playback and multiple HDMI inputs", "15999.00", 15,
                  "televisions", 3),
    _catalog_item("Von Hotpoint Refrigerator 200L", "VON-RF2L-KE",
                  "200L Double Door Refrigerator with Energy Saving Technology", "32999.00", 7, "appliances", 2),
    _catalog_item("Sony PlayStation 5", "SNY-PS5-KE",
                  "PlayStation 5 Console with Ultra-High Speed SSD and 4K Gaming", "89999.00", 5, "gaming", 2),
    _catalog_item("HP Pavilion x360", "HP-PX360-KE",
                  "14-inch FHD Touchscreen 2-in-1 Laptop, 16GB RAM, 512GB SSD", "79999.00", 7, "computers", 2),
    _catalog_item("Dell Inspiron 15", "DEL-IN15-KE",
                  "15.6-inch FHD Laptop, 8GB RAM, 256GB SSD, Intel Core i3", "49999.00", 14, "computers", 3),
    _catalog_item("JBL Flip 6 Bluetooth Speaker", "JBL-FL6-KE",
                  "Portable Bluetooth Speaker with 12 Hours of Playtime, Waterproof", "13999.00", 20, "audio", 5),
    _catalog_item("Sony WH-1000XM5 Headphones", "SNY-WHX5-KE",
                  "Wireless Noise Cancelling Headphones with 30-hour Battery Life", "44999.00", 8, "audio", 2),
    _catalog_item("Canon EOS 1500D DSLR Camera", "CAN-1500D-KE",
                  "24.1MP DSLR Camera with 18-55mm Lens, Full HD Video Recording", "59999.00", 6, "cameras", 2),
    _catalog_item("Anker PowerCore 20000mAh Power Bank", "ANK-PC20K-KE",
                  "20000mAh Portable Charger with Fast Charging Technology", "5999.00", 25, "accessories", 7),
    _catalog_item("TP-Link Archer C6 Wi-Fi Router", "TPL-AC6-KE",
                  "AC1200 Dual Band Wi-Fi Router with 4 External Antennas", "5499.00", 15, "networking", 4),
]

"""
Mock data generator for the business assistant.
Creates realistic demo orders against an existing product catalog.
"""

import random
from decimal import Decimal
from typing import List, Optional, Sequence, Set

from faker import Faker

from bizassist.models.catalog import OrderCreate, OrderItem, OrderStatus, Product

# Relative frequency of each status in generated orders
STATUS_WEIGHTS = {
    OrderStatus.PENDING: 2,
    OrderStatus.PROCESSING: 3,
    OrderStatus.SHIPPED: 3,
    OrderStatus.COMPLETED: 5,
    OrderStatus.CANCELLED: 1,
}


def generate_orders(
    products: Sequence[Product],
    count: int = 10,
    seed: Optional[int] = None,
    existing_numbers: Sequence[str] = (),
) -> List[OrderCreate]:
    """
    Generate demo orders for the given products.

    Args:
        products: Catalog to draw line items from (must be non-empty)
        count: Number of orders to generate
        seed: Seed for Faker and the item picker, for reproducible output
        existing_numbers: Order numbers that must not be reused

    Returns:
        Orders ready for OrderService.create_order / Storage.create_order
    """
    if not products:
        raise ValueError("Cannot generate orders without products")

    fake = Faker()
    rng = random.Random(seed)
    if seed is not None:
        fake.seed_instance(seed)

    taken: Set[str] = set(existing_numbers)
    statuses = list(STATUS_WEIGHTS)
    weights = list(STATUS_WEIGHTS.values())
    orders = []

    for _ in range(count):
        number = str(fake.random_int(min=40000, max=99999))
        while number in taken:
            number = str(fake.random_int(min=40000, max=99999))
        taken.add(number)

        picked = rng.sample(list(products), k=min(len(products), rng.randint(1, 3)))
        items = [
            OrderItem(product_id=p.id, quantity=rng.randint(1, 2), price=p.price)
            for p in picked
        ]
        total = sum((item.price * item.quantity for item in items), Decimal("0"))

        orders.append(OrderCreate(
            order_number=number,
            status=rng.choices(statuses, weights=weights, k=1)[0],
            total=total,
            customer_name=fake.name(),
            customer_email=fake.email(),
            items=items,
        ))

    return orders

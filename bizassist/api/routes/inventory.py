"""
Inventory endpoints
"""

from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query, Response

from bizassist.api.deps import get_inventory_service
from bizassist.api.schemas.catalog import StockAdjustment
from bizassist.models.catalog import InventorySummary, Product, ProductCreate, ProductUpdate
from bizassist.services.inventory_service import InventoryService
from bizassist.utils.errors import ConflictError

router = APIRouter(prefix="/api/inventory", tags=["inventory"])


@router.get("", response_model=List[Product])
def list_products(
    q: Optional[str] = Query(default=None, description="Substring search over name, SKU and description"),
    inventory: InventoryService = Depends(get_inventory_service),
):
    if q:
        return inventory.search_products(q)
    return inventory.get_all_products()


@router.get("/summary", response_model=InventorySummary)
def inventory_summary(inventory: InventoryService = Depends(get_inventory_service)):
    return inventory.get_inventory_summary()


@router.get("/low-stock", response_model=List[Product])
def low_stock_products(inventory: InventoryService = Depends(get_inventory_service)):
    return inventory.get_low_stock_products()


@router.get("/{product_id}", response_model=Product)
def get_product(product_id: int, inventory: InventoryService = Depends(get_inventory_service)):
    product = inventory.get_product(product_id)
    if product is None:
        raise HTTPException(status_code=404, detail="Product not found")
    return product


@router.post("", response_model=Product, status_code=201)
def add_product(product: ProductCreate, inventory: InventoryService = Depends(get_inventory_service)):
    try:
        return inventory.add_product(product)
    except ConflictError:
        raise HTTPException(status_code=409, detail=f"Product with SKU {product.sku} already exists")


@router.put("/{product_id}", response_model=Product)
def update_product(
    product_id: int,
    update: ProductUpdate,
    inventory: InventoryService = Depends(get_inventory_service),
):
    product = inventory.update_product(product_id, update)
    if product is None:
        raise HTTPException(status_code=404, detail="Product not found")
    return product


@router.post("/{product_id}/stock", response_model=Product)
def adjust_stock(
    product_id: int,
    adjustment: StockAdjustment,
    inventory: InventoryService = Depends(get_inventory_service),
):
    product = inventory.update_stock(product_id, adjustment.delta)
    if product is None:
        raise HTTPException(status_code=404, detail="Product not found")
    return product


@router.delete("/{product_id}", status_code=204)
def delete_product(product_id: int, inventory: InventoryService = Depends(get_inventory_service)):
    if not inventory.delete_product(product_id):
        raise HTTPException(status_code=404, detail="Product not found")
    return Response(status_code=204)

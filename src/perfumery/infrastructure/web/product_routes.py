"""Catalog endpoints."""

from __future__ import annotations

from fastapi import APIRouter, Depends, File, Form, UploadFile

from perfumery.application.add_product import AddProductHandler
from perfumery.application.dto import ProductSpec
from perfumery.application.remove_product import RemoveProductHandler
from perfumery.application.seed_catalog import SeedCatalogHandler
from perfumery.application.show_products import ShowProductsHandler
from perfumery.application.update_product import UpdateProductHandler
from perfumery.domain.exceptions import DomainException
from perfumery.infrastructure.bootstrap import Container
from perfumery.infrastructure.web.dependencies import get_container, require_admin
from perfumery.infrastructure.web.schemas import product_to_json

router = APIRouter(prefix="/api/products", tags=["products"])


def _product_form(
    name: str | None = Form(default=None),
    description: str | None = Form(default=None),
    price: str | None = Form(default=None),
    category: str | None = Form(default=None),
    notes: str | None = Form(default=None),
    badge: str | None = Form(default=None),
    quantity: str | None = Form(default=None),
) -> ProductSpec:
    return ProductSpec.from_form(
        name=name,
        description=description,
        price=price,
        category=category,
        notes=notes,
        badge=badge,
        quantity=quantity,
    )


def _store_image(container: Container, image: UploadFile | None) -> str | None:
    if image is None or not image.filename:
        return None
    store = container.image_store
    # One byte past the limit is enough to reject an oversized file.
    data = image.file.read(store.max_bytes + 1)
    return store.save(image.filename, image.content_type, data)


@router.get("")
def list_products(
    category: str | None = None,
    inStock: str | None = None,
    container: Container = Depends(get_container),
) -> list[dict]:
    products = ShowProductsHandler(container.product_repo).handle(category=category, in_stock=inStock)
    return [product_to_json(p) for p in products]


@router.post("/bulk-insert", dependencies=[Depends(require_admin)])
def bulk_insert(container: Container = Depends(get_container)) -> dict:
    summary = SeedCatalogHandler(container.product_repo).handle()
    return {
        "message": f"{len(summary.products)} sample products inserted successfully",
        "products": [product_to_json(p) for p in summary.products],
    }


@router.get("/{product_id}")
def get_product(product_id: str, container: Container = Depends(get_container)) -> dict:
    return product_to_json(ShowProductsHandler(container.product_repo).handle_one(product_id))


@router.post("", status_code=201, dependencies=[Depends(require_admin)])
def add_product(
    spec: ProductSpec = Depends(_product_form),
    image: UploadFile | None = File(default=None),
    container: Container = Depends(get_container),
) -> dict:
    image_path = _store_image(container, image)
    try:
        product = AddProductHandler(container.product_repo).handle(spec, image=image_path)
    except DomainException:
        container.image_store.discard(image_path)
        raise
    return product_to_json(product)


@router.put("/{product_id}", dependencies=[Depends(require_admin)])
def update_product(
    product_id: str,
    spec: ProductSpec = Depends(_product_form),
    image: UploadFile | None = File(default=None),
    container: Container = Depends(get_container),
) -> dict:
    ShowProductsHandler(container.product_repo).handle_one(product_id)
    image_path = _store_image(container, image)
    try:
        product = UpdateProductHandler(container.product_repo).handle(
            product_id, spec, image=image_path
        )
    except DomainException:
        container.image_store.discard(image_path)
        raise
    return product_to_json(product)


@router.delete("/{product_id}", dependencies=[Depends(require_admin)])
def delete_product(product_id: str, container: Container = Depends(get_container)) -> dict:
    RemoveProductHandler(container.product_repo).handle(product_id)
    return {"message": "Product deleted successfully"}

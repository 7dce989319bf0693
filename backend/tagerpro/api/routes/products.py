from typing import Any

from fastapi import APIRouter, HTTPException, Response

from tagerpro import crud
from tagerpro.api.deps import SessionDep, storage_errors
from tagerpro.models import ProductCreate, ProductPublic, ProductUpdate

router = APIRouter()


@router.get("", response_model=list[ProductPublic])
def read_products(session: SessionDep) -> Any:
    with storage_errors(session, "fetch products"):
        return crud.list_products(session=session)


@router.get("/{id}", response_model=ProductPublic)
def read_product(id: int, session: SessionDep) -> Any:
    with storage_errors(session, "fetch product"):
        product = crud.get_product(session=session, product_id=id)
    if not product:
        raise HTTPException(status_code=404, detail="Product not found")
    return product


@router.post("", response_model=ProductPublic, status_code=201)
def create_product(*, session: SessionDep, product_in: ProductCreate) -> Any:
    with storage_errors(session, "create product"):
        return crud.create_product(session=session, product_in=product_in)


@router.put("/{id}", response_model=ProductPublic)
def update_product(*, id: int, session: SessionDep, product_in: ProductUpdate) -> Any:
    with storage_errors(session, "update product"):
        product = crud.update_product(session=session, product_id=id, product_in=product_in)
    if not product:
        raise HTTPException(status_code=404, detail="Product not found")
    return product


@router.delete("/{id}", status_code=204)
def delete_product(id: int, session: SessionDep) -> Response:
    with storage_errors(session, "delete product"):
        deleted = crud.delete_product(session=session, product_id=id)
    if not deleted:
        raise HTTPException(status_code=404, detail="Product not found")
    return Response(status_code=204)

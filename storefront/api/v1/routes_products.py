from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from storefront.api.deps import get_db
from storefront.api.v1.schemas import ProductList, ProductResponse
from storefront.services import catalog

router = APIRouter()

@router.get('/products', response_model=ProductList)
def list_products(db: Session = Depends(get_db)):
    return {'products': catalog.list_products(db)}

@router.get('/products/{product_id}', response_model=ProductResponse)
def get_product(product_id: int, db: Session = Depends(get_db)):
    return {'product': catalog.get_product(db, product_id)}

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from storefront.db.session import SessionLocal
from storefront.security.utils import verify_token
from storefront.services.providers import PaymentProvider, card_provider, wallet_provider

security = HTTPBearer(auto_error=False)

def get_db():
    db = SessionLocal()
    try: yield db
    finally: db.close()

def get_current_identity(creds: HTTPAuthorizationCredentials = Depends(security)) -> dict:
    return verify_token(creds.credentials if creds else None)  # id, username, email, role

def get_card_provider() -> PaymentProvider:
    return card_provider()

def get_wallet_provider() -> PaymentProvider:
    return wallet_provider()

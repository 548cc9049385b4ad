#!/usr/bin/env python3
"""
run_demo.py - End-to-end walkthrough against a running storefront API
- Registers/logs in a customer
- Lists the catalog (run scripts/seed.py first)
- Places an order for the first two products
- Pays for it through the PayPal endpoint (or Stripe with --stripe-token)
- Lists orders and sends a contact message
"""

import argparse
import json
import os
import uuid
from typing import Any, Dict, List, Optional

import requests


class DemoRunner:
    def __init__(self, base_url: str, stripe_token: Optional[str] = None):
        self.api = base_url.rstrip("/")
        self.stripe_token = stripe_token
        suffix = uuid.uuid4().hex[:6]
        self.username = f"demo_{suffix}"
        self.email = f"demo_{suffix}@example.com"
        self.password = "P@ssw0rd!"
        self.token: Optional[str] = None

    # ---------- helpers ----------
    def show_step(self, title: str):
        print(f"\n=== {title} ===")

    def mask_token(self, token: Optional[str]) -> str:
        if not token:
            return "<none>"
        return token if len(token) <= 12 else f"{token[:8]}...{token[-6:]}"

    def headers(self) -> Dict[str, str]:
        return {"Authorization": f"Bearer {self.token}"} if self.token else {}

    def call_api(
        self,
        method: str,
        path: str,
        data: Optional[Any] = None,
        expected_status: List[int] = [200, 201],
        auth: bool = False,
    ) -> Dict[str, Any]:
        url = f"{self.api}{path}"
        print(f"\n-> {method} {url}")
        if data is not None:
            print(f"   Body: {json.dumps(data, indent=2)}")
        try:
            resp = requests.request(method, url, headers=self.headers() if auth else None, json=data, timeout=30)
        except requests.exceptions.RequestException as e:
            print(f"   Error: \033[91m{e}\033[0m")
            return {"status": None, "data": None}

        color = "\033[92m" if resp.status_code in expected_status else "\033[93m"
        print(f"   Status: {color}{resp.status_code}\033[0m")
        try:
            js = resp.json()
        except json.JSONDecodeError:
            print(f"   Content: {resp.text}")
            return {"status": resp.status_code, "data": None}
        print(json.dumps(js, indent=2))
        return {"status": resp.status_code, "data": js}

    # ---------- flow ----------
    def run_demo(self):
        print("Starting storefront demo")
        print("=" * 50)

        self.show_step("Customer: register")
        reg = self.call_api("POST", "/register", data={
            "username": self.username,
            "email": self.email,
            "password": self.password,
            "full_name": "Demo Customer",
            "address": "1 Demo Street, Dublin",
        }, expected_status=[201])

        self.show_step("Customer: login (by email)")
        lr = self.call_api("POST", "/login", data={"username": self.email, "password": self.password})
        self.token = (lr.get("data") or {}).get("token") or (reg.get("data") or {}).get("token")
        print(f"Access token: {self.mask_token(self.token)}")

        self.show_step("Customer: profile")
        self.call_api("GET", "/profile", auth=True)

        self.show_step("Catalog: list products")
        products = ((self.call_api("GET", "/products").get("data") or {}).get("products")) or []
        if not products:
            print("\033[93mCatalog is empty; run scripts/seed.py first.\033[0m")
            return

        self.show_step("Customer: place order")
        items = [{"product_id": p["id"], "quantity": qty} for p, qty in zip(products[:2], (2, 1))]
        method = "stripe" if self.stripe_token else "paypal"
        co = self.call_api("POST", "/orders", data={
            "items": items,
            "shipping_address": "1 Demo Street, Dublin",
            "payment_method": method,
        }, expected_status=[201], auth=True)
        order = (co.get("data") or {}).get("order") or {}
        order_id = order.get("id")
        print(f"Order ID: {order_id}; Total: {order.get('total_amount')}")

        self.show_step(f"Payment: {method}")
        if not order_id:
            print("Skipping payment - no order")
        elif self.stripe_token:
            self.call_api("POST", "/payments/stripe", data={"order_id": order_id, "token": self.stripe_token}, auth=True)
        else:
            self.call_api("POST", "/payments/paypal", data={"order_id": order_id, "payment_id": f"PAYID-{uuid.uuid4().hex[:12].upper()}"}, auth=True)

        self.show_step("Orders: list")
        self.call_api("GET", "/orders", auth=True)
        if order_id:
            self.call_api("GET", f"/orders/{order_id}", auth=True)

        self.show_step("Contact: send message")
        self.call_api("POST", "/contact", data={
            "name": "Demo Customer",
            "email": self.email,
            "subject": "Delivery slot",
            "message": "Can you deliver before noon?",
        })

        print("\n\033[92m=== DEMO COMPLETE ===\033[0m")


if __name__ == "__main__":
    ap = argparse.ArgumentParser()
    ap.add_argument("--base-url", default=os.getenv("STOREFRONT_API", "http://localhost:8000/api"))
    ap.add_argument("--stripe-token", default=None, help="Pay with Stripe using this card token (e.g. tok_visa)")
    args = ap.parse_args()
    DemoRunner(args.base_url, args.stripe_token).run_demo()

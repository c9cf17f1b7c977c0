#!/usr/bin/env python3
"""
Seed script: registers users and creates items via the API (no direct DB).
Run: API must be running.
  python scripts/seed_data.py
  python scripts/seed_data.py --users 10 --items-per-user 30
"""

import argparse
import random

import httpx

API_BASE = "http://localhost:8000"

TITLES = [
    "Laptop stand", "Mechanical keyboard", "Wireless mouse", "Bluetooth headphones",
    "27in monitor", "HD webcam", "USB-C cable", "Power bank", "External SSD",
    "Coffee maker", "Electric kettle", "Blender", "Ring light", "Tripod", "Streaming mic",
]

DESCRIPTIONS = [
    "Great for home office and remote work.",
    "High quality build and reliable performance.",
    "Popular choice for developers and designers.",
    "Compact, light and durable.",
]


def random_item(user_index: int, n: int) -> dict:
    return {
        "code": f"SKU-{user_index:03d}-{n:04d}",
        "title": random.choice(TITLES),
        "description": random.choice(DESCRIPTIONS),
        "price": random.choice([99, 199, 499, 999, 1999, 4999, 9999]),
        # Zero stock on some items so both ACTIVE and INACTIVE show up
        "stock": random.choice([0, 0, 1, 5, 10, 50]),
    }


def main():
    ap = argparse.ArgumentParser(description="Seed users and items via API")
    ap.add_argument("--users", type=int, default=5, help="Number of users to create")
    ap.add_argument("--items-per-user", type=int, default=20, help="Items per user")
    ap.add_argument("--base-url", default=API_BASE, help="API base URL")
    args = ap.parse_args()

    created_items = 0
    errors = []

    with httpx.Client(base_url=args.base_url, timeout=30.0) as client:
        for i in range(args.users):
            creds = {"username": f"user{i + 1}", "password": "password123"}
            r = client.post("/register", json=creds)
            if r.status_code not in (201, 409):
                errors.append(f"Register {creds['username']}: {r.status_code} {r.text[:80]}")
                continue

            r = client.post("/login", json=creds)
            if r.status_code != 200:
                errors.append(f"Login {creds['username']}: {r.status_code}")
                continue
            headers = {"Authorization": f"Bearer {r.json()['token']}"}

            for n in range(args.items_per_user):
                r = client.post("/api/v1/items", headers=headers, json=random_item(i + 1, n))
                if r.status_code == 201:
                    created_items += 1
                elif r.status_code != 409:
                    errors.append(f"Item {creds['username']}: {r.status_code}")
            print(f"  {creds['username']}: total items so far {created_items}")

    print(f"\nDone. Items created: {created_items}")
    if errors:
        print(f"Errors ({len(errors)}):")
        for e in errors[:15]:
            print("  ", e)


if __name__ == "__main__":
    main()

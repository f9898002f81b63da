"""Seed script for local development data."""

from __future__ import annotations

from decimal import Decimal
from random import randint

from dotenv import load_dotenv
from faker import Faker

from packages.db.base import Base, get_engine
from packages.db.models import Customer, Product
from packages.db.session import SessionLocal

fake = Faker()


def seed_customers(session, count: int = 30) -> list[Customer]:
    customers = [Customer(company=fake.company()) for _ in range(count)]
    session.add_all(customers)
    session.flush()
    return customers


def seed_products(session, count: int = 20) -> list[Product]:
    products = []
    for _ in range(count):
        product = Product(
            product_name=fake.catch_phrase()[:50],
            list_price=Decimal(randint(100, 9999)) / 100,
        )
        products.append(product)
    session.add_all(products)
    session.flush()
    return products


def main(url: str | None = None) -> None:
    engine = get_engine(url)
    Base.metadata.create_all(engine)

    session = SessionLocal(bind=engine)
    try:
        seed_customers(session)
        seed_products(session)
        session.commit()
        print("Seeded database with fake data.")
    except Exception:
        session.rollback()
        raise
    finally:
        session.close()


if __name__ == "__main__":
    load_dotenv()
    main()

"""
Demo catalogue loader.

Usage:
    python -m inventory.seed
    python -m inventory.seed --force  # Insert even if products already exist
"""

import argparse
import logging

from sqlalchemy.orm import Session

from inventory.models.product import Product

logger = logging.getLogger(__name__)

DEMO_PRODUCTS = [
    {
        "name": "Smartphone Samsung Galaxy S24",
        "description": "Smartphone premium com câmera de 200MP e tela Dynamic AMOLED 2X",
        "price": 3299.99,
        "category": "Eletrônicos",
        "stock": 25,
    },
    {
        "name": "Notebook Dell Inspiron 15",
        "description": "Notebook para uso profissional com Intel i7, 16GB RAM e SSD 512GB",
        "price": 2899.00,
        "category": "Informática",
        "stock": 15,
    },
    {
        "name": "Tênis Nike Air Max 270",
        "description": "Tênis esportivo com tecnologia Air Max para máximo conforto",
        "price": 599.90,
        "category": "Calçados",
        "stock": 50,
    },
    {
        "name": "Cafeteira Nespresso Essenza Mini",
        "description": "Cafeteira automática compacta com sistema de cápsulas",
        "price": 399.00,
        "category": "Casa e Cozinha",
        "stock": 30,
    },
    {
        "name": 'Livro "Clean Code" - Robert Martin',
        "description": "Guia essencial para escrever código limpo e manutenível",
        "price": 89.90,
        "category": "Livros",
        "stock": 100,
    },
]


def seed_products(db: Session, force: bool = False) -> int:
    """
    Insert the demo products.

    Skips seeding when the table already has rows, unless force is set.

    Returns:
        Number of products inserted
    """
    if not force and db.query(Product).count() > 0:
        logger.info("Products table is not empty, skipping demo data")
        return 0

    db.add_all(Product(active=True, **data) for data in DEMO_PRODUCTS)
    db.commit()

    logger.info(f"Inserted {len(DEMO_PRODUCTS)} demo products")
    return len(DEMO_PRODUCTS)


def main():
    parser = argparse.ArgumentParser(description="Load demo products into the database")
    parser.add_argument("--force", action="store_true", help="Insert even if products already exist")
    args = parser.parse_args()

    from inventory.database import Base, SessionLocal, engine

    logging.basicConfig(level=logging.INFO, format="%(asctime)s - %(name)s - %(levelname)s - %(message)s")
    Base.metadata.create_all(bind=engine)

    db = SessionLocal()
    try:
        inserted = seed_products(db, force=args.force)
    finally:
        db.close()
    print(f"{inserted} products inserted")


if __name__ == "__main__":
    main()

from .product_repository import ProductRepository as ProductRepository

from .dynamodb_product_repository import (
    DynamoDBProductRepository as DynamoDBProductRepository,
)
from .in_memory_product_repository import (
    InMemoryProductRepository as InMemoryProductRepository,
)

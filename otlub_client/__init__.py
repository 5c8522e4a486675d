from otlub_client.config import ConfigurationError, SdkConfig
from otlub_client.errors import EnvelopeError, ProtocolError, SdkError, StorageError, TransportError
from otlub_client.models import (
    Address,
    Category,
    Coordinates,
    CreateOrderRequest,
    CreateProductRequest,
    Envelope,
    Failure,
    HealthResponse,
    LoginResponse,
    Order,
    OrderFilters,
    OrderItem,
    Outcome,
    Product,
    ProductAttribute,
    ProductFilters,
    RegisterRequest,
    StockInfo,
    Success,
    Transaction,
    TransactionFilters,
    UpdateUserRequest,
    User,
    Wallet,
    Warehouse,
)
from otlub_client.sdk import UninitializedError, build_service, destroy, get_instance, initialize, shutdown
from otlub_client.services import OtlubService

__version__ = "0.1.0"

__all__ = [
    "SdkConfig",
    "ConfigurationError",
    "OtlubService",
    "initialize",
    "get_instance",
    "destroy",
    "shutdown",
    "build_service",
    "UninitializedError",
    "SdkError",
    "TransportError",
    "ProtocolError",
    "EnvelopeError",
    "StorageError",
    "Outcome",
    "Success",
    "Failure",
    "Envelope",
    "User",
    "LoginResponse",
    "Product",
    "Category",
    "ProductAttribute",
    "StockInfo",
    "Warehouse",
    "Address",
    "Coordinates",
    "Order",
    "OrderItem",
    "Wallet",
    "Transaction",
    "HealthResponse",
    "RegisterRequest",
    "UpdateUserRequest",
    "CreateProductRequest",
    "CreateOrderRequest",
    "ProductFilters",
    "OrderFilters",
    "TransactionFilters",
]

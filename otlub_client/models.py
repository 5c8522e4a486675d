from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Callable, Generic, Mapping, TypeVar, Union

from otlub_client.errors import SdkError

T = TypeVar("T")
U = TypeVar("U")


@dataclass(frozen=True)
class Success(Generic[T]):
    value: T

    @property
    def is_success(self) -> bool:
        return True


@dataclass(frozen=True)
class Failure:
    error: SdkError

    @property
    def is_success(self) -> bool:
        return False


Outcome = Union[Success[T], Failure]


@dataclass(frozen=True)
class Envelope(Generic[T]):
    data: T
    status: int
    message: str | None
    timestamp: str

    @staticmethod
    def from_dict(payload: Any, decode: Callable[[Any], U]) -> "Envelope[U]":
        body = _mapping(payload, "envelope")
        if "data" not in body:
            raise KeyError("data")
        message = body.get("message")
        return Envelope(
            data=decode(body["data"]),
            status=int(body.get("status") or 0),
            message=None if message is None else str(message),
            timestamp=str(body.get("timestamp") or ""),
        )


def _mapping(data: Any, name: str) -> Mapping[str, Any]:
    if not isinstance(data, Mapping):
        raise TypeError(f"{name} must be a JSON object, got {type(data).__name__}")
    return data


def _str(value: Any) -> str:
    return "" if value is None else str(value)


def _optional_str(value: Any) -> str | None:
    return None if value is None else str(value)


def _required_str(data: Mapping[str, Any], key: str) -> str:
    value = data[key]
    if value is None:
        raise ValueError(f"{key} must not be null")
    return str(value)


def list_of(decode: Callable[[Any], T]) -> Callable[[Any], list[T]]:
    def decode_list(data: Any) -> list[T]:
        if not isinstance(data, list):
            raise TypeError(f"expected a JSON array, got {type(data).__name__}")
        return [decode(item) for item in data]

    return decode_list


@dataclass(frozen=True)
class User:
    id: str
    email: str
    first_name: str = ""
    last_name: str = ""
    phone: str | None = None
    avatar: str | None = None
    is_active: bool = True
    created_at: str = ""
    updated_at: str = ""

    @staticmethod
    def from_dict(data: Any) -> "User":
        data = _mapping(data, "User")
        return User(
            id=_required_str(data, "id"),
            email=_str(data.get("email")),
            first_name=_str(data.get("firstName")),
            last_name=_str(data.get("lastName")),
            phone=_optional_str(data.get("phone")),
            avatar=_optional_str(data.get("avatar")),
            is_active=bool(data.get("isActive", True)),
            created_at=_str(data.get("createdAt")),
            updated_at=_str(data.get("updatedAt")),
        )


@dataclass(frozen=True)
class LoginResponse:
    token: str
    user: User
    expires_at: str

    @staticmethod
    def from_dict(data: Any) -> "LoginResponse":
        data = _mapping(data, "LoginResponse")
        token = _required_str(data, "token").strip()
        if not token:
            raise ValueError("login response carried an empty token")
        return LoginResponse(
            token=token,
            user=User.from_dict(data["user"]),
            expires_at=_str(data.get("expiresAt")),
        )


@dataclass(frozen=True)
class Category:
    id: str
    name: str
    description: str | None = None
    parent_id: str | None = None
    children: tuple["Category", ...] | None = None
    is_active: bool = True
    created_at: str = ""
    updated_at: str = ""

    @staticmethod
    def from_dict(data: Any) -> "Category":
        data = _mapping(data, "Category")
        children = data.get("children")
        return Category(
            id=_required_str(data, "id"),
            name=_str(data.get("name")),
            description=_optional_str(data.get("description")),
            parent_id=_optional_str(data.get("parentId")),
            children=None if children is None else tuple(Category.from_dict(c) for c in children),
            is_active=bool(data.get("isActive", True)),
            created_at=_str(data.get("createdAt")),
            updated_at=_str(data.get("updatedAt")),
        )


@dataclass(frozen=True)
class ProductAttribute:
    name: str
    value: str
    type: str

    @staticmethod
    def from_dict(data: Any) -> "ProductAttribute":
        data = _mapping(data, "ProductAttribute")
        return ProductAttribute(
            name=_required_str(data, "name"),
            value=_str(data.get("value")),
            type=_str(data.get("type")),
        )

    def to_payload(self) -> dict[str, Any]:
        return {"name": self.name, "value": self.value, "type": self.type}


@dataclass(frozen=True)
class Coordinates:
    lat: float
    lng: float

    @staticmethod
    def from_dict(data: Any) -> "Coordinates":
        data = _mapping(data, "Coordinates")
        return Coordinates(lat=float(data["lat"]), lng=float(data["lng"]))


@dataclass(frozen=True)
class Address:
    street: str
    city: str
    state: str
    country: str
    postal_code: str
    coordinates: Coordinates | None = None

    @staticmethod
    def from_dict(data: Any) -> "Address":
        data = _mapping(data, "Address")
        coordinates = data.get("coordinates")
        return Address(
            street=_str(data.get("street")),
            city=_str(data.get("city")),
            state=_str(data.get("state")),
            country=_str(data.get("country")),
            postal_code=_str(data.get("postalCode")),
            coordinates=None if coordinates is None else Coordinates.from_dict(coordinates),
        )

    def to_payload(self) -> dict[str, Any]:
        payload: dict[str, Any] = {
            "street": self.street,
            "city": self.city,
            "state": self.state,
            "country": self.country,
            "postalCode": self.postal_code,
        }
        if self.coordinates is not None:
            payload["coordinates"] = {"lat": self.coordinates.lat, "lng": self.coordinates.lng}
        return payload


@dataclass(frozen=True)
class Warehouse:
    id: str
    name: str
    address: Address | None = None
    capacity: int = 0
    is_active: bool = True
    created_at: str = ""
    updated_at: str = ""

    @staticmethod
    def from_dict(data: Any) -> "Warehouse":
        data = _mapping(data, "Warehouse")
        address = data.get("address")
        return Warehouse(
            id=_required_str(data, "id"),
            name=_str(data.get("name")),
            address=None if address is None else Address.from_dict(address),
            capacity=int(data.get("capacity") or 0),
            is_active=bool(data.get("isActive", True)),
            created_at=_str(data.get("createdAt")),
            updated_at=_str(data.get("updatedAt")),
        )


@dataclass(frozen=True)
class StockInfo:
    quantity: int
    reserved: int
    available: int
    warehouse: Warehouse | None = None

    @staticmethod
    def from_dict(data: Any) -> "StockInfo":
        data = _mapping(data, "StockInfo")
        warehouse = data.get("warehouse")
        return StockInfo(
            quantity=int(data["quantity"]),
            reserved=int(data.get("reserved") or 0),
            available=int(data.get("available") or 0),
            warehouse=None if warehouse is None else Warehouse.from_dict(warehouse),
        )


@dataclass(frozen=True)
class Product:
    id: str
    name: str = ""
    description: str = ""
    price: float = 0.0
    currency: str = ""
    category: Category | None = None
    attributes: tuple[ProductAttribute, ...] = ()
    images: tuple[str, ...] = ()
    stock: StockInfo | None = None
    is_active: bool = True
    created_at: str = ""
    updated_at: str = ""

    @staticmethod
    def from_dict(data: Any) -> "Product":
        data = _mapping(data, "Product")
        category = data.get("category")
        stock = data.get("stock")
        return Product(
            id=_required_str(data, "id"),
            name=_str(data.get("name")),
            description=_str(data.get("description")),
            price=float(data.get("price") or 0.0),
            currency=_str(data.get("currency")),
            category=None if category is None else Category.from_dict(category),
            attributes=tuple(ProductAttribute.from_dict(a) for a in data.get("attributes") or ()),
            images=tuple(str(image) for image in data.get("images") or ()),
            stock=None if stock is None else StockInfo.from_dict(stock),
            is_active=bool(data.get("isActive", True)),
            created_at=_str(data.get("createdAt")),
            updated_at=_str(data.get("updatedAt")),
        )


@dataclass(frozen=True)
class OrderItem:
    product_id: str
    quantity: int
    price: float
    total: float

    @staticmethod
    def from_dict(data: Any) -> "OrderItem":
        data = _mapping(data, "OrderItem")
        return OrderItem(
            product_id=_required_str(data, "productId"),
            quantity=int(data["quantity"]),
            price=float(data.get("price") or 0.0),
            total=float(data.get("total") or 0.0),
        )

    def to_payload(self) -> dict[str, Any]:
        return {
            "productId": self.product_id,
            "quantity": self.quantity,
            "price": self.price,
            "total": self.total,
        }


@dataclass(frozen=True)
class Order:
    id: str
    user_id: str = ""
    items: tuple[OrderItem, ...] = ()
    total: float = 0.0
    currency: str = ""
    status: str = ""
    shipping_address: Address | None = None
    billing_address: Address | None = None
    payment_method: str = ""
    created_at: str = ""
    updated_at: str = ""

    @staticmethod
    def from_dict(data: Any) -> "Order":
        data = _mapping(data, "Order")
        shipping = data.get("shippingAddress")
        billing = data.get("billingAddress")
        return Order(
            id=_required_str(data, "id"),
            user_id=_str(data.get("userId")),
            items=tuple(OrderItem.from_dict(item) for item in data.get("items") or ()),
            total=float(data.get("total") or 0.0),
            currency=_str(data.get("currency")),
            status=_str(data.get("status")),
            shipping_address=None if shipping is None else Address.from_dict(shipping),
            billing_address=None if billing is None else Address.from_dict(billing),
            payment_method=_str(data.get("paymentMethod")),
            created_at=_str(data.get("createdAt")),
            updated_at=_str(data.get("updatedAt")),
        )


@dataclass(frozen=True)
class Wallet:
    id: str
    user_id: str = ""
    balance: float = 0.0
    currency: str = ""
    is_active: bool = True
    created_at: str = ""
    updated_at: str = ""

    @staticmethod
    def from_dict(data: Any) -> "Wallet":
        data = _mapping(data, "Wallet")
        return Wallet(
            id=_required_str(data, "id"),
            user_id=_str(data.get("userId")),
            balance=float(data.get("balance") or 0.0),
            currency=_str(data.get("currency")),
            is_active=bool(data.get("isActive", True)),
            created_at=_str(data.get("createdAt")),
            updated_at=_str(data.get("updatedAt")),
        )


@dataclass(frozen=True)
class Transaction:
    id: str
    wallet_id: str = ""
    type: str = ""
    amount: float = 0.0
    currency: str = ""
    description: str = ""
    status: str = ""
    created_at: str = ""

    @staticmethod
    def from_dict(data: Any) -> "Transaction":
        data = _mapping(data, "Transaction")
        return Transaction(
            id=_required_str(data, "id"),
            wallet_id=_str(data.get("walletId")),
            type=_str(data.get("type")),
            amount=float(data.get("amount") or 0.0),
            currency=_str(data.get("currency")),
            description=_str(data.get("description")),
            status=_str(data.get("status")),
            created_at=_str(data.get("createdAt")),
        )


@dataclass(frozen=True)
class HealthResponse:
    status: str
    timestamp: str = ""
    router: str = ""
    version: str = ""

    @staticmethod
    def from_dict(data: Any) -> "HealthResponse":
        data = _mapping(data, "HealthResponse")
        return HealthResponse(
            status=_required_str(data, "status"),
            timestamp=_str(data.get("timestamp")),
            router=_str(data.get("router")),
            version=_str(data.get("version")),
        )


def _drop_none(payload: dict[str, Any]) -> dict[str, Any]:
    return {key: value for key, value in payload.items() if value is not None}


@dataclass(frozen=True)
class LoginRequest:
    email: str
    password: str

    def to_payload(self) -> dict[str, Any]:
        return {"email": self.email, "password": self.password}


@dataclass(frozen=True)
class RegisterRequest:
    email: str
    password: str
    first_name: str
    last_name: str
    phone: str | None = None

    def to_payload(self) -> dict[str, Any]:
        return _drop_none(
            {
                "email": self.email,
                "password": self.password,
                "firstName": self.first_name,
                "lastName": self.last_name,
                "phone": self.phone,
            }
        )


@dataclass(frozen=True)
class UpdateUserRequest:
    first_name: str | None = None
    last_name: str | None = None
    phone: str | None = None
    avatar: str | None = None

    def to_payload(self) -> dict[str, Any]:
        return _drop_none(
            {
                "firstName": self.first_name,
                "lastName": self.last_name,
                "phone": self.phone,
                "avatar": self.avatar,
            }
        )


@dataclass(frozen=True)
class CreateProductRequest:
    name: str
    description: str
    price: float
    currency: str
    category_id: str
    attributes: tuple[ProductAttribute, ...] = ()
    images: tuple[str, ...] = ()

    def to_payload(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "description": self.description,
            "price": self.price,
            "currency": self.currency,
            "categoryId": self.category_id,
            "attributes": [attribute.to_payload() for attribute in self.attributes],
            "images": list(self.images),
        }


@dataclass(frozen=True)
class CreateOrderRequest:
    items: tuple[OrderItem, ...]
    shipping_address: Address
    billing_address: Address
    payment_method: str

    def to_payload(self) -> dict[str, Any]:
        return {
            "items": [item.to_payload() for item in self.items],
            "shippingAddress": self.shipping_address.to_payload(),
            "billingAddress": self.billing_address.to_payload(),
            "paymentMethod": self.payment_method,
        }


def _flag(value: bool | None) -> str | None:
    if value is None:
        return None
    return "true" if value else "false"


def _merge_params(known: dict[str, str | None], extra: Mapping[str, str]) -> dict[str, str]:
    params = {str(key): str(value) for key, value in extra.items()}
    params.update({key: value for key, value in known.items() if value is not None})
    return params


@dataclass(frozen=True)
class ProductFilters:
    category_id: str | None = None
    search: str | None = None
    is_active: bool | None = None
    extra: Mapping[str, str] = field(default_factory=dict)

    def to_params(self) -> dict[str, str]:
        return _merge_params(
            {
                "categoryId": self.category_id,
                "search": self.search,
                "isActive": _flag(self.is_active),
            },
            self.extra,
        )


@dataclass(frozen=True)
class OrderFilters:
    status: str | None = None
    extra: Mapping[str, str] = field(default_factory=dict)

    def to_params(self) -> dict[str, str]:
        return _merge_params({"status": self.status}, self.extra)


@dataclass(frozen=True)
class TransactionFilters:
    type: str | None = None
    status: str | None = None
    extra: Mapping[str, str] = field(default_factory=dict)

    def to_params(self) -> dict[str, str]:
        return _merge_params({"type": self.type, "status": self.status}, self.extra)


Filters = Union[ProductFilters, OrderFilters, TransactionFilters, Mapping[str, str], None]


def query_params(filters: Filters) -> dict[str, str]:
    if filters is None:
        return {}
    if isinstance(filters, (ProductFilters, OrderFilters, TransactionFilters)):
        return filters.to_params()
    return {str(key): str(value) for key, value in filters.items()}

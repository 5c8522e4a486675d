from .auth_api import AuthApi
from .user_api import UserApi
from .products_api import ProductsApi
from .orders_api import OrdersApi
from .stock_api import StockApi
from .wallet_api import WalletApi
from .health_api import HealthApi

__all__ = ["AuthApi", "UserApi", "ProductsApi", "OrdersApi", "StockApi", "WalletApi", "HealthApi"]

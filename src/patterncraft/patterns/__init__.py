"""
Pattern Vignettes

Decorator, Strategy, Observer, Factory, Adapter, Builder and the init-once
settings handle, each built on the composition runtime.
"""

from .compression import FileCompressor, compression_registry
from .http_builder import HttpRequest, HttpRequestBuilder
from .notifications import BasicNotification, Delivery, notification_from_config
from .payments import CheckoutService, PaymentProcessorFactory
from .settings import AppSettings, SettingsHandle
from .stock_ticker import StockPriceTracker

__all__ = [
    "AppSettings",
    "BasicNotification",
    "CheckoutService",
    "Delivery",
    "FileCompressor",
    "HttpRequest",
    "HttpRequestBuilder",
    "PaymentProcessorFactory",
    "SettingsHandle",
    "StockPriceTracker",
    "compression_registry",
    "notification_from_config",
]

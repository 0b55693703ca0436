"""
Runnable vignettes.

Each demo builds its components, exercises them and returns a DemoReport
describing what happened. Demos never print; rendering is the CLI's job.
"""

import logging
import tempfile
from collections.abc import Callable
from dataclasses import dataclass, field
from decimal import Decimal
from pathlib import Path
from typing import Optional

from .composition import Registry, build_chain, chain_layers
from .config_loader import ConfigBundle, load_config_bundle
from .errors import PatternCraftError
from .patterns.compression import FileCompressor, compression_registry
from .patterns.http_builder import HttpRequestBuilder
from .patterns.notifications import (
    BasicNotification,
    email,
    notification_from_config,
    slack,
    sms,
    urgent,
)
from .patterns.payments import (
    CheckoutService,
    PaymentProcessorFactory,
    PayPalPaymentAdapter,
    PayPalService,
    StripePaymentAdapter,
    StripePaymentGateway,
)
from .patterns.settings import DEFAULT_SETTINGS, AppSettings, SettingsHandle
from .patterns.stock_ticker import (
    EmailNotifier,
    MobileAppNotifier,
    SmsNotifier,
    StockPriceTracker,
)
from .principles import birds, workers
from .principles.discounts import build_discount_registry, calculator_for
from .principles.error_handling import (
    Customer,
    CustomerDirectory,
    Ledger,
    read_text_file,
    validate_credentials,
)
from .principles.orders import (
    EmailNotificationService,
    InMemoryOrderRepository,
    Order,
    OrderProcessor,
    SmsNotificationService,
)
from .principles.users import InMemoryUserRepository, UserService, UserValidator, WelcomeMailer

logger = logging.getLogger(__name__)


@dataclass
class DemoReport:
    title: str
    lines: list[str] = field(default_factory=list)

    def add(self, line: str = "") -> None:
        self.lines.append(line)

    def section(self, heading: str) -> None:
        if self.lines:
            self.lines.append("")
        self.lines.append(f"## {heading}")


Demo = Callable[[ConfigBundle], DemoReport]

demo_registry: Registry[Demo] = Registry("demos", normalize=lambda key: str(key).lower())


def demo(name: str) -> Callable[[Demo], Demo]:
    """Register a demo function under `name`."""

    def decorator(func: Demo) -> Demo:
        demo_registry.register(name, lambda: func)
        return func

    return decorator


def available_demos() -> list[str]:
    return [str(key) for key in demo_registry.keys()]


def run_demo(name: str, config: Optional[ConfigBundle] = None) -> DemoReport:
    func = demo_registry.resolve(name)
    bundle = config if config is not None else load_config_bundle()
    logger.info("Running demo %s", name)
    return func(bundle)


@demo("decorator")
def decorator_demo(config: ConfigBundle) -> DemoReport:
    """Stack email, SMS and Slack channels around a basic notification."""
    report = DemoReport("Decorator: stacked notifications")

    chains = [
        ("Basic", build_chain(BasicNotification())),
        ("Basic + Email", build_chain(BasicNotification(), [email("admin@example.com")])),
        (
            "Basic + Email + SMS",
            build_chain(BasicNotification(), [email("admin@example.com"), sms("+1-555-0123")]),
        ),
        (
            "All channels + Urgent",
            build_chain(
                BasicNotification(),
                [email("admin@example.com"), sms("+1-555-0123"), slack("alerts"), urgent()],
            ),
        ),
    ]
    for label, chain in chains:
        report.section(f"{label} ({' -> '.join(chain_layers(chain))})")
        message = "Server is down!" if "Urgent" in label else "Server is running"
        for delivery in chain.invoke(message):
            report.add(str(delivery))

    section = config.get("notifications") or {}
    if section.get("channels"):
        report.section("Configured chain")
        for delivery in notification_from_config(section).invoke("Deployment finished"):
            report.add(str(delivery))
    return report


@demo("strategy")
def strategy_demo(config: ConfigBundle) -> DemoReport:
    """Swap compression algorithms on a single FileCompressor."""
    report = DemoReport("Strategy: swappable compression")
    file_data = b"patterncraft " * 128
    compressor = FileCompressor(compression_registry.resolve("zip"))
    for algorithm in ("zip", "bzip2", "gzip", "lzma"):
        if compressor.active.name.lower() != algorithm:
            compressor.set_strategy(compression_registry.resolve(algorithm))
            report.add(f"Compression strategy changed to: {compressor.algorithm}")
        compressed = compressor.compress_file(file_data)
        restored = compressor.decompress_file(compressed)
        report.add(
            f"{compressor.algorithm}: {len(file_data)} -> {len(compressed)} bytes, "
            f"round trip {'ok' if restored == file_data else 'FAILED'}"
        )
    return report


@demo("observer")
def observer_demo(config: ConfigBundle) -> DemoReport:
    """Push stock price updates to subscribed notifiers."""
    report = DemoReport("Observer: stock price notifications")
    tracker = StockPriceTracker("AAPL")
    email_notifier = EmailNotifier("investor@example.com")
    sms_notifier = SmsNotifier("+1-555-0123")
    app_notifier = MobileAppNotifier("user123")
    for observer in (email_notifier, sms_notifier, app_notifier):
        tracker.attach(observer)

    for price in ("150.25", "152.50"):
        notified = tracker.set_price(price)
        report.add(f"Price {price}: notified {notified} observers")

    report.add("Unsubscribing SMS notifier")
    tracker.detach(sms_notifier)
    notified = tracker.set_price("148.75")
    report.add(f"Price 148.75: notified {notified} observers")

    for notifier in (email_notifier, sms_notifier, app_notifier):
        received = len(notifier.received)
        report.add(f"{notifier.channel} {notifier.target} received {received} updates")
    return report


@demo("factory")
def factory_demo(config: ConfigBundle) -> DemoReport:
    """Pick payment processors by type and by amount tier."""
    report = DemoReport("Factory: payment processors")
    factory = PaymentProcessorFactory.from_config(config.get("payments") or {})

    report.add(str(factory.create_processor("creditcard").process_payment("150.00", "****1234")))
    report.add(str(factory.create_processor("PayPal").process_payment("50.00", "user@example.com")))

    report.section("Selection by amount")
    for amount in ("25", "100", "9999.99", "25000"):
        processor = factory.create_processor_for_amount(amount)
        report.add(f"${amount} -> {processor.name} (tier {factory.tiers.match(Decimal(amount))})")
    return report


@demo("adapter")
def adapter_demo(config: ConfigBundle) -> DemoReport:
    """Route checkout through Stripe and PayPal adapters."""
    report = DemoReport("Adapter: third-party payment gateways")
    amount = Decimal("99.99")

    stripe_checkout = CheckoutService(StripePaymentAdapter(StripePaymentGateway()))
    result = stripe_checkout.process_checkout(amount, "cus_12345")
    report.add(f"Stripe: charged ${result.amount}, transaction {result.transaction_id}")

    paypal_checkout = CheckoutService(PayPalPaymentAdapter(PayPalService()))
    result = paypal_checkout.process_checkout(amount, "user@example.com")
    report.add(f"PayPal: charged ${result.amount}, reference {result.transaction_id}")

    try:
        stripe_checkout.process_checkout(amount, "unknown-customer")
    except PatternCraftError as exc:
        report.add(f"Declined: {exc} (cause: {type(exc.__cause__).__name__})")
    return report


@demo("builder")
def builder_demo(config: ConfigBundle) -> DemoReport:
    """Build HTTP request descriptions step by step."""
    report = DemoReport("Builder: HTTP requests")
    simple = HttpRequestBuilder().set_url("https://api.example.com/users").build()
    report.section("Simple request")
    report.lines.extend(simple.render().splitlines())

    complex_request = (
        HttpRequestBuilder()
        .set_url("https://api.example.com/users")
        .set_method("POST")
        .add_header("Content-Type", "application/json")
        .add_header("Authorization", "Bearer token123")
        .add_query_parameter("include", "profile")
        .add_query_parameter("fields", "id,name,email")
        .set_body('{"name": "John Doe", "email": "john@example.com"}')
        .set_timeout(60000)
        .set_follow_redirects(False)
        .build()
    )
    report.section("Complex request")
    report.lines.extend(complex_request.render().splitlines())
    prepared = complex_request.to_requests().prepare()
    report.add(f"Prepared URL: {prepared.url}")
    return report


@demo("settings")
def settings_demo(config: ConfigBundle) -> DemoReport:
    """Share one settings object through an init-once handle."""
    report = DemoReport("Init-once settings handle")
    handle = SettingsHandle(lambda: AppSettings({**DEFAULT_SETTINGS, **config["settings"]}))
    first = handle.get()
    second = handle.get()
    second.set("AppName", "My Application")
    report.add(f"Database: {first.get('DatabaseConnection')}")
    report.add(f"Same instance: {first is second}")
    report.add(f"AppName seen through first reference: {first.get('AppName')}")
    return report


@demo("srp")
def srp_demo(config: ConfigBundle) -> DemoReport:
    """Register users through single-purpose collaborators."""
    report = DemoReport("Single responsibility: user registration")
    mailer = WelcomeMailer()
    repository = InMemoryUserRepository()
    service = UserService(UserValidator(), repository, mailer)
    user = service.create_user("jane@example.com", "correct-horse", "Jane")
    report.add(f"Created {user.email}; welcome emails sent: {len(mailer.outbox)}")
    try:
        service.create_user("not-an-email", "short", "")
    except PatternCraftError as exc:
        report.add(f"Rejected: {exc}")
    report.add(f"Users stored: {len(repository)}")
    return report


@demo("ocp")
def ocp_demo(config: ConfigBundle) -> DemoReport:
    """Price orders with pluggable discount strategies."""
    report = DemoReport("Open/closed: discount strategies")
    registry = build_discount_registry(config.get("discounts"))
    order_amount = Decimal("1000")
    for customer_types in (("regular",), ("vip",), ("vip", "seasonal")):
        calculator = calculator_for(*customer_types, registry=registry)
        report.add(
            f"{calculator.description}: ${order_amount} -> "
            f"${calculator.calculate_final_price(order_amount)}"
        )
    return report


@demo("lsp")
def lsp_demo(config: ConfigBundle) -> DemoReport:
    """Move birds and measure shapes without broken promises."""
    report = DemoReport("Liskov substitution: birds and shapes")
    for bird in (birds.sparrow(), birds.eagle(), birds.penguin()):
        report.add(f"{birds.eat(bird)}; {bird.move()}")
    shapes: list[birds.Shape] = [birds.Rectangle(5, 10), birds.Square(5)]
    for shape in shapes:
        report.add(f"{type(shape).__name__} area: {shape.area()}")
    return report


@demo("isp")
def isp_demo(config: ConfigBundle) -> DemoReport:
    """Query workers and office devices for narrow capabilities."""
    report = DemoReport("Interface segregation: workers and devices")
    report.lines.extend(
        workers.run_shift([workers.HumanWorker("John"), workers.RobotWorker("R2D2")])
    )
    report.section("Devices")
    for device in (workers.SimplePrinter(), workers.ScannerPrinter(), workers.AllInOnePrinter()):
        report.add(f"{type(device).__name__}: {', '.join(workers.capabilities_of(device))}")
    return report


@demo("dip")
def dip_demo(config: ConfigBundle) -> DemoReport:
    """Process orders over injected storage and messaging backends."""
    report = DemoReport("Dependency inversion: order processing")
    order = Order(id=12345, customer_email="customer@example.com", total=Decimal("99.99"))
    configurations = [
        ("SQL + Email", InMemoryOrderRepository("sql"), EmailNotificationService("smtp.local")),
        ("Mongo + SMS", InMemoryOrderRepository("mongo"), SmsNotificationService("api-key-123")),
    ]
    for label, repository, notifier in configurations:
        OrderProcessor(repository, notifier).process_order(order)
        report.add(f"{label}: stored in {repository.backend}; {notifier.sent[-1]}")
    return report


@demo("errors")
def errors_demo(config: ConfigBundle) -> DemoReport:
    """Tell invalid input, missing records and short balances apart."""
    report = DemoReport("Error handling: distinguishable failures")
    directory = CustomerDirectory([Customer(1, "Ada")])
    for customer_id in (1, -1, 99999):
        try:
            report.add(f"get_by_id({customer_id}) -> {directory.get_by_id(customer_id).name}")
        except PatternCraftError as exc:
            report.add(f"get_by_id({customer_id}) -> {type(exc).__name__}")

    ledger = Ledger({"checking": 100, "savings": 0})
    try:
        ledger.transfer("checking", "savings", 250)
    except PatternCraftError as exc:
        report.add(f"transfer -> {exc}")

    try:
        validate_credentials("", "short")
    except PatternCraftError as exc:
        report.add(f"validate_credentials -> {exc}")

    with tempfile.TemporaryDirectory() as tmp:
        path = Path(tmp) / "motd.txt"
        path.write_text("hello", encoding="utf-8")
        report.add(f"read_text_file -> {read_text_file(path)!r}")
    return report

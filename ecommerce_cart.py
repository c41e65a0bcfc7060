"""
E-Commerce Cart System
======================

Core Design: In-memory shopping cart that composes observable products,
pricing wrappers and pluggable payment methods.

Design Patterns & Strategies Used:
1. Observer Pattern - Products broadcast price/quantity changes
2. Factory Pattern - Create plain, organic and restricted products
3. Decorator Pattern - Organic markup computed on every price read
4. Proxy Pattern - Price visibility gated behind an authorization check
5. Singleton Pattern - One shared cart per process
6. Strategy Pattern - Card and cash payments selected by method tag

Features:
- Add/remove items (by identity or by listed position)
- Totals that tolerate restricted prices
- Checkout with payment dispatch
- Thread-safe cart and product state
"""

from abc import ABC, abstractmethod
from enum import Enum
from typing import List, Optional, Dict, Union
from dataclasses import dataclass, field
from datetime import datetime
from uuid import uuid4
import logging
import random
import threading


logger = logging.getLogger(__name__)

CURRENCY = "MDL"
ORGANIC_MARKUP = 0.10
ADMIN_PROBABILITY = 0.5


class PriceAccess(Enum):
    RESTRICTED = "Price access restricted"


# Returned instead of a number when a price read is not authorized
ACCESS_RESTRICTED = PriceAccess.RESTRICTED

Price = Union[float, PriceAccess]


def is_restricted(price: Price) -> bool:
    """Tell the restriction sentinel apart from a numeric price"""
    return price is ACCESS_RESTRICTED


class PricedItem(ABC):
    """Anything the cart can hold: exposes a price and a quantity"""

    @property
    @abstractmethod
    def name(self) -> str:
        pass

    @abstractmethod
    def get_price(self) -> Price:
        pass

    @abstractmethod
    def get_quantity(self) -> int:
        pass


# ==================== OBSERVER PATTERN ====================
# Products notify subscribers whenever price or quantity changes

class Observer(ABC):
    """Observer interface"""

    @abstractmethod
    def update(self):
        pass


class Product(PricedItem):
    """Product entity and subject of price/quantity notifications"""

    def __init__(self, name: str, price: float, quantity: int):
        self._name = name
        self.price = price
        self.quantity = quantity
        self.observers: List[Observer] = []
        self._lock = threading.RLock()

    @property
    def name(self) -> str:
        return self._name

    def add_observer(self, observer: Observer):
        """Subscribe an observer (ignored if already subscribed)"""
        with self._lock:
            if observer not in self.observers:
                self.observers.append(observer)

    def remove_observer(self, observer: Observer):
        """Unsubscribe an observer"""
        with self._lock:
            if observer in self.observers:
                self.observers.remove(observer)

    def notify_observers(self):
        """Notify observers in subscription order.

        A failing observer is logged and skipped so the remaining
        subscribers still receive the change.
        """
        with self._lock:
            for observer in list(self.observers):
                try:
                    observer.update()
                except Exception:
                    logger.exception("Observer %r failed on update of %s", observer, self._name)

    def get_price(self) -> float:
        with self._lock:
            return self.price

    def get_quantity(self) -> int:
        with self._lock:
            return self.quantity

    def set_price(self, new_price: float):
        with self._lock:
            self.price = new_price
            self.notify_observers()

    def set_quantity(self, new_quantity: int):
        with self._lock:
            self.quantity = new_quantity
            self.notify_observers()

    def __repr__(self) -> str:
        return (f"Product(name={self._name!r}, price={self.get_price()!r}, "
                f"quantity={self.get_quantity()!r})")


class PriceObserver(Observer):
    """Reports the current price of the product it watches"""

    def __init__(self, product: Product):
        self.product = product
        self.messages: List[str] = []

    def update(self) -> str:
        message = (f"Price of product {self.product.name} was updated: "
                   f"{self.product.get_price()} {CURRENCY}")
        self.messages.append(message)
        logger.info(message)
        return message


# ==================== DECORATOR PATTERN ====================
# Read-time price views over a live product

class ProductDecorator(PricedItem):
    """Base decorator - delegates everything to the wrapped item"""

    def __init__(self, item: PricedItem):
        self._item = item

    @property
    def item(self) -> PricedItem:
        return self._item

    @property
    def name(self) -> str:
        return self._item.name

    def get_price(self) -> Price:
        return self._item.get_price()

    def get_quantity(self) -> int:
        return self._item.get_quantity()


class OrganicProductDecorator(ProductDecorator):
    """Adds the organic markup on top of the wrapped price"""

    def __init__(self, item: PricedItem, markup: float = ORGANIC_MARKUP):
        super().__init__(item)
        self.markup = markup

    def get_price(self) -> Price:
        price = self._item.get_price()
        if is_restricted(price):
            return price
        return price * (1 + self.markup)


# ==================== PROXY PATTERN ====================
# Guards price visibility of a product the proxy owns

class Authorizer(ABC):
    """Decides whether the caller may see prices"""

    @abstractmethod
    def is_authorized(self) -> bool:
        pass


class RandomAuthorizer(Authorizer):
    """Coin-flip stand-in for a permission system. Not a security check."""

    def __init__(self, probability: float = ADMIN_PROBABILITY,
                 rng: Optional[random.Random] = None):
        self.probability = probability
        self.rng = rng or random.Random()

    def is_authorized(self) -> bool:
        return self.rng.random() < self.probability


class StaticAuthorizer(Authorizer):
    """Always answers the same way"""

    def __init__(self, allowed: bool):
        self.allowed = allowed

    def is_authorized(self) -> bool:
        return self.allowed


class ProductProxy(PricedItem):
    """Restricted view over a product created by the proxy itself"""

    def __init__(self, name: str, price: float, quantity: int,
                 authorizer: Optional[Authorizer] = None):
        self._product = Product(name, price, quantity)
        self.authorizer = authorizer or RandomAuthorizer()

    @property
    def name(self) -> str:
        return self._product.name

    def get_price(self) -> Price:
        if self.authorizer.is_authorized():
            return self._product.get_price()
        return ACCESS_RESTRICTED

    def get_quantity(self) -> int:
        return self._product.get_quantity()


# ==================== FACTORY PATTERN ====================

class ProductFactory:
    """Single creation surface for every product variant"""

    def create_product(self, name: str, price: float, quantity: int) -> Product:
        return Product(name, price, quantity)

    def create_organic(self, name: str, price: float, quantity: int,
                       markup: float = ORGANIC_MARKUP) -> OrganicProductDecorator:
        return OrganicProductDecorator(self.create_product(name, price, quantity), markup)

    def create_restricted(self, name: str, price: float, quantity: int,
                          authorizer: Optional[Authorizer] = None) -> ProductProxy:
        return ProductProxy(name, price, quantity, authorizer)


# ==================== SINGLETON PATTERN ====================
# One shared cart per process

@dataclass
class CartLine:
    """Line item view of one cart entry"""
    item: PricedItem
    name: str
    unit_price: Optional[float]
    quantity: int
    subtotal: float

    @property
    def priceable(self) -> bool:
        return self.unit_price is not None


@dataclass
class CartSnapshot:
    """Items held at one instant and the total they add up to"""
    items: List[PricedItem]
    total: float


class Cart:
    """Shopping cart aggregate"""

    _instance: Optional["Cart"] = None
    _instance_lock = threading.Lock()

    def __init__(self):
        self._items: List[PricedItem] = []
        self._lock = threading.Lock()

    @classmethod
    def get_instance(cls) -> "Cart":
        """Return the shared cart, creating it on first access"""
        if cls._instance is None:
            with cls._instance_lock:
                if cls._instance is None:
                    cls._instance = cls()
        return cls._instance

    def add_item(self, item: PricedItem):
        if not isinstance(item, PricedItem):
            raise TypeError(f"Cart items must be PricedItem, got {type(item).__name__}")
        with self._lock:
            self._items.append(item)

    def remove_item(self, item: PricedItem):
        """Remove the first entry that is this exact object"""
        self.remove_items([item])

    def remove_at(self, index: int) -> Optional[PricedItem]:
        """Remove the entry listed at ``index``"""
        with self._lock:
            if 0 <= index < len(self._items):
                return self._items.pop(index)
            return None

    def get_items(self) -> List[PricedItem]:
        with self._lock:
            return list(self._items)

    def get_lines(self) -> List[CartLine]:
        return self._build_lines(self.get_items())

    def get_total(self) -> float:
        return self._compute_total(self.get_items())

    def take_snapshot(self) -> CartSnapshot:
        """Capture the current items and price them.

        Prices are read after the cart lock is released, since reading a
        product takes the product's own lock.
        """
        items = self.get_items()
        return CartSnapshot(items, self._compute_total(items))

    def remove_items(self, items: List[PricedItem]):
        """Remove one entry per given object, matched by identity"""
        with self._lock:
            for item in items:
                for index, existing in enumerate(self._items):
                    if existing is item:
                        del self._items[index]
                        break

    def is_empty(self) -> bool:
        with self._lock:
            return not self._items

    def checkout(self) -> Optional[float]:
        """Report the total and remove the priced items from the cart.

        Returns None without touching anything when there is nothing to pay.
        Items added while the total is computed stay in the cart.
        """
        snapshot = self.take_snapshot()
        if not snapshot.items or snapshot.total <= 0:
            logger.warning("The shopping cart is empty. Cannot complete the order.")
            return None
        self.remove_items(snapshot.items)
        logger.info("Order completed. Total to pay: %s %s", snapshot.total, CURRENCY)
        return snapshot.total

    def clear(self):
        with self._lock:
            self._items = []

    def _build_lines(self, items: List[PricedItem]) -> List[CartLine]:
        lines = []
        for item in items:
            price = item.get_price()
            quantity = item.get_quantity()
            if is_restricted(price):
                lines.append(CartLine(item, item.name, None, quantity, 0))
            else:
                lines.append(CartLine(item, item.name, price, quantity, price * quantity))
        return lines

    def _compute_total(self, items: List[PricedItem]) -> float:
        # restricted lines contribute nothing
        return sum(line.subtotal for line in self._build_lines(items))

    def __len__(self) -> int:
        with self._lock:
            return len(self._items)


# ==================== STRATEGY PATTERN ====================
# Payment methods selected at checkout

class PaymentMethod(Enum):
    CARD = "card"
    CASH = "cash"


class PaymentStatus(Enum):
    SUCCESS = "SUCCESS"


@dataclass
class PaymentReceipt:
    """Record of a completed payment"""
    method: PaymentMethod
    amount: float
    status: PaymentStatus = PaymentStatus.SUCCESS
    receipt_id: str = field(default_factory=lambda: str(uuid4()))
    created_at: datetime = field(default_factory=datetime.now)


class PaymentStrategy(ABC):
    """Payment strategy interface"""

    @abstractmethod
    def pay(self, amount: float) -> PaymentReceipt:
        raise NotImplementedError(f"{type(self).__name__} must implement pay()")


class CardPaymentStrategy(PaymentStrategy):
    """Bank card payment (simulated)"""

    def pay(self, amount: float) -> PaymentReceipt:
        logger.info("Payment of %s %s made by bank card.", amount, CURRENCY)
        return PaymentReceipt(PaymentMethod.CARD, amount)


class CashPaymentStrategy(PaymentStrategy):
    """Cash payment (simulated)"""

    def pay(self, amount: float) -> PaymentReceipt:
        logger.info("Payment of %s %s made in cash.", amount, CURRENCY)
        return PaymentReceipt(PaymentMethod.CASH, amount)


def make_payment(amount: float, strategy: PaymentStrategy) -> PaymentReceipt:
    return strategy.pay(amount)


class PaymentDispatcher:
    """Maps method tags to payment strategies"""

    def __init__(self, strategies: Optional[Dict[PaymentMethod, PaymentStrategy]] = None):
        if strategies is None:
            strategies = {
                PaymentMethod.CARD: CardPaymentStrategy(),
                PaymentMethod.CASH: CashPaymentStrategy(),
            }
        self.strategies: Dict[PaymentMethod, PaymentStrategy] = dict(strategies)

    def register(self, method: PaymentMethod, strategy: PaymentStrategy):
        self.strategies[method] = strategy

    def resolve(self, method_tag: Union[str, PaymentMethod, None]) -> Optional[PaymentStrategy]:
        """Find the strategy for a tag such as "card"; None when unknown"""
        if isinstance(method_tag, PaymentMethod):
            return self.strategies.get(method_tag)
        if not method_tag:
            return None
        try:
            method = PaymentMethod(str(method_tag).strip().lower())
        except ValueError:
            return None
        return self.strategies.get(method)

    def pay(self, amount: float, method_tag: Union[str, PaymentMethod, None]) -> Optional[PaymentReceipt]:
        strategy = self.resolve(method_tag)
        if strategy is None:
            logger.warning("Invalid payment method: %r", method_tag)
            return None
        return make_payment(amount, strategy)


# ==================== CHECKOUT WORKFLOW ====================

class CheckoutStatus(Enum):
    COMPLETED = "COMPLETED"
    EMPTY_CART = "EMPTY_CART"
    INVALID_METHOD = "INVALID_METHOD"


@dataclass
class CheckoutResult:
    status: CheckoutStatus
    total: float = 0
    receipt: Optional[PaymentReceipt] = None

    @property
    def succeeded(self) -> bool:
        return self.status == CheckoutStatus.COMPLETED


class CartService:
    """Entry point used by the presentation layer.

    Holds the one cart handed to it at startup, plus the product factory
    and the payment dispatcher.
    """

    def __init__(self, cart: Cart, factory: Optional[ProductFactory] = None,
                 dispatcher: Optional[PaymentDispatcher] = None):
        self.cart = cart
        self.factory = factory or ProductFactory()
        self.dispatcher = dispatcher or PaymentDispatcher()

    def add_product(self, name: str, price: float, quantity: int,
                    organic: bool = False) -> PricedItem:
        if organic:
            item = self.factory.create_organic(name, price, quantity)
        else:
            item = self.factory.create_product(name, price, quantity)
        self.cart.add_item(item)
        return item

    def add_restricted_product(self, name: str, price: float, quantity: int,
                               authorizer: Optional[Authorizer] = None) -> ProductProxy:
        item = self.factory.create_restricted(name, price, quantity, authorizer)
        self.cart.add_item(item)
        return item

    def remove_product(self, index: int) -> Optional[PricedItem]:
        return self.cart.remove_at(index)

    def get_lines(self) -> List[CartLine]:
        return self.cart.get_lines()

    def get_total(self) -> float:
        return self.cart.get_total()

    def checkout(self, method_tag: Union[str, PaymentMethod, None]) -> CheckoutResult:
        """Pay for the cart with the selected method, then remove what was paid.

        The total is read once so the amount paid is the amount reported,
        even when restricted prices answer differently on each read. Items
        added after the snapshot stay in the cart for the next checkout.
        """
        snapshot = self.cart.take_snapshot()
        total = snapshot.total
        if total <= 0:
            logger.warning("The shopping cart is empty. Cannot complete the order.")
            return CheckoutResult(CheckoutStatus.EMPTY_CART)

        receipt = self.dispatcher.pay(total, method_tag)
        if receipt is None:
            return CheckoutResult(CheckoutStatus.INVALID_METHOD, total)

        logger.info("Order completed. Total to pay: %s %s", total, CURRENCY)
        self.cart.remove_items(snapshot.items)
        return CheckoutResult(CheckoutStatus.COMPLETED, total, receipt)


# ==================== DEMONSTRATION ====================

def main():
    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(message)s")

    print("=" * 60)
    print("E-COMMERCE CART SYSTEM DEMONSTRATION")
    print("=" * 60)
    print()

    service = CartService(Cart.get_instance())

    print("1. Adding a product with a price observer:")
    apples = service.add_product("Apples", 10, 5)
    apples.add_observer(PriceObserver(apples))
    print(f"Total: {service.get_total()} {CURRENCY}")
    print()

    print("2. Organic view of the same product:")
    organic_apples = OrganicProductDecorator(apples)
    print(f"Organic price: {organic_apples.get_price():.2f} {CURRENCY}")
    apples.set_price(20)
    print(f"Organic price after change: {organic_apples.get_price():.2f} {CURRENCY}")
    print()

    print("3. Restricted product:")
    pears = service.add_restricted_product("Pears", 8, 10)
    print(f"Pears price: {pears.get_price()}, quantity: {pears.get_quantity()}")
    for line in service.get_lines():
        price = line.unit_price if line.priceable else ACCESS_RESTRICTED.value
        print(f"{line.name} - {price} - Quantity: {line.quantity} - Total: {line.subtotal} {CURRENCY}")
    print()

    print("4. Checkout by card:")
    result = service.checkout("card")
    print(f"Status: {result.status.value}, paid: {result.total} {CURRENCY}")
    print(f"Items left in cart: {len(service.cart)}")
    print()

    print("5. Checkout of an empty cart:")
    result = service.checkout("cash")
    print(f"Status: {result.status.value}")
    print()

    print("=" * 60)
    print("DESIGN PATTERNS & STRATEGIES:")
    print("=" * 60)
    print("1. Observer Pattern - Price change notifications")
    print("2. Factory Pattern - Product creation")
    print("3. Decorator Pattern - Organic markup")
    print("4. Proxy Pattern - Restricted price access")
    print("5. Singleton Pattern - Shared cart")
    print("6. Strategy Pattern - Card and cash payments")
    print("=" * 60)


if __name__ == "__main__":
    main()

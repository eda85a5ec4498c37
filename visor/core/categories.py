"""Static category registry.

Maps category ids to display metadata. The table is validated once at
import time; an inconsistent table raises CategoryRegistryError.
"""

from enum import Enum

from pydantic import BaseModel, ConfigDict, ValidationError

from visor.core.exceptions import CategoryRegistryError
from visor.core.models import TransactionType


class CategoryIcon(str, Enum):
    """Icon identifiers understood by the clients (lucide names)."""

    BRIEFCASE = "briefcase"
    BANKNOTE = "banknote"
    GIFT = "gift"
    BUILDING = "building"
    TRENDING_UP = "trending-up"
    HOME = "home"
    PERCENT = "percent"
    DOLLAR_SIGN = "dollar-sign"
    COFFEE = "coffee"
    SHOPPING_CART = "shopping-cart"
    CAR = "car"
    FUEL = "fuel"
    GAMEPAD = "gamepad-2"
    ZAP = "zap"
    HEART = "heart"
    SHOPPING_BAG = "shopping-bag"
    SHIRT = "shirt"
    GRADUATION_CAP = "graduation-cap"
    PLANE = "plane"
    SMARTPHONE = "smartphone"
    CALCULATOR = "calculator"
    DUMBBELL = "dumbbell"
    BABY = "baby"
    DOG = "dog"
    MUSIC = "music"
    CAMERA = "camera"
    WRENCH = "wrench"
    USERS = "users"
    CREDIT_CARD = "credit-card"
    LANDMARK = "landmark"
    AWARD = "award"
    PIGGY_BANK = "piggy-bank"
    BITCOIN = "bitcoin"


DEFAULT_ICON = CategoryIcon.CREDIT_CARD

INCOME_COLOR = "hsl(142, 76%, 36%)"
EXPENSE_COLOR = "hsl(1, 83%, 63%)"
INVESTMENT_COLOR = "hsl(207, 100%, 54%)"

_TYPE_COLORS = {
    TransactionType.INCOME: INCOME_COLOR,
    TransactionType.EXPENSE: EXPENSE_COLOR,
    TransactionType.INVESTMENT: INVESTMENT_COLOR,
}


class Category(BaseModel):
    """Display metadata for one category."""

    model_config = ConfigDict(frozen=True)

    id: str
    name: str
    type: TransactionType
    icon: CategoryIcon
    color: str


def _cat(id: str, name: str, type: TransactionType, icon: CategoryIcon | str) -> Category:
    try:
        return Category(id=id, name=name, type=type, icon=icon, color=_TYPE_COLORS[type])
    except ValidationError as e:
        raise CategoryRegistryError(f"Invalid category {id!r}: {e}") from e


_I = TransactionType.INCOME
_E = TransactionType.EXPENSE
_V = TransactionType.INVESTMENT

CATEGORIES: tuple[Category, ...] = (
    # Income
    _cat("salary", "Salary", _I, CategoryIcon.BRIEFCASE),
    _cat("freelance", "Freelance", _I, CategoryIcon.BANKNOTE),
    _cat("bonus", "Bonus", _I, CategoryIcon.GIFT),
    _cat("business", "Business Income", _I, CategoryIcon.BUILDING),
    _cat("investment_returns", "Investment Returns", _I, CategoryIcon.TRENDING_UP),
    _cat("rental", "Rental Income", _I, CategoryIcon.HOME),
    _cat("dividend", "Dividends", _I, CategoryIcon.PERCENT),
    _cat("other_income", "Other Income", _I, CategoryIcon.DOLLAR_SIGN),
    # Expense
    _cat("food", "Food & Dining", _E, CategoryIcon.COFFEE),
    _cat("groceries", "Groceries", _E, CategoryIcon.SHOPPING_CART),
    _cat("transportation", "Transportation", _E, CategoryIcon.CAR),
    _cat("fuel", "Fuel", _E, CategoryIcon.FUEL),
    _cat("entertainment", "Entertainment", _E, CategoryIcon.GAMEPAD),
    _cat("utilities", "Bills & Utilities", _E, CategoryIcon.ZAP),
    _cat("healthcare", "Healthcare", _E, CategoryIcon.HEART),
    _cat("housing", "Housing & Rent", _E, CategoryIcon.HOME),
    _cat("shopping", "Shopping", _E, CategoryIcon.SHOPPING_BAG),
    _cat("clothing", "Clothing", _E, CategoryIcon.SHIRT),
    _cat("education", "Education", _E, CategoryIcon.GRADUATION_CAP),
    _cat("travel", "Travel", _E, CategoryIcon.PLANE),
    _cat("technology", "Technology", _E, CategoryIcon.SMARTPHONE),
    _cat("insurance", "Insurance", _E, CategoryIcon.CALCULATOR),
    _cat("fitness", "Fitness & Sports", _E, CategoryIcon.DUMBBELL),
    _cat("family", "Family & Children", _E, CategoryIcon.BABY),
    _cat("pets", "Pets", _E, CategoryIcon.DOG),
    _cat("music", "Music & Media", _E, CategoryIcon.MUSIC),
    _cat("photography", "Photography", _E, CategoryIcon.CAMERA),
    _cat("maintenance", "Maintenance & Repairs", _E, CategoryIcon.WRENCH),
    _cat("charity", "Charity & Donations", _E, CategoryIcon.USERS),
    _cat("loan_emi", "Loan EMI", _E, CategoryIcon.LANDMARK),
    _cat("other_expense", "Other Expenses", _E, CategoryIcon.CREDIT_CARD),
    # Investment
    _cat("stocks", "Stocks", _V, CategoryIcon.TRENDING_UP),
    _cat("mutual_funds", "Mutual Funds", _V, CategoryIcon.LANDMARK),
    _cat("etf", "ETFs", _V, CategoryIcon.TRENDING_UP),
    _cat("bonds", "Bonds", _V, CategoryIcon.AWARD),
    _cat("fixed_deposits", "Fixed Deposits", _V, CategoryIcon.PIGGY_BANK),
    _cat("cryptocurrency", "Cryptocurrency", _V, CategoryIcon.BITCOIN),
    _cat("real_estate", "Real Estate", _V, CategoryIcon.BUILDING),
    _cat("gold", "Gold & Precious Metals", _V, CategoryIcon.AWARD),
    _cat("retirement", "Retirement Funds", _V, CategoryIcon.PIGGY_BANK),
    _cat("other_investment", "Other Investments", _V, CategoryIcon.TRENDING_UP),
)


def _build_index(categories: tuple[Category, ...]) -> dict[str, Category]:
    """Index categories by id, rejecting duplicates.

    Raises:
        CategoryRegistryError: On a duplicate id or a duplicate name
            within one transaction type.
    """
    index: dict[str, Category] = {}
    names: set[tuple[TransactionType, str]] = set()
    for cat in categories:
        if cat.id in index:
            raise CategoryRegistryError(f"Duplicate category id: {cat.id}")
        key = (cat.type, cat.name.lower())
        if key in names:
            raise CategoryRegistryError(
                f"Duplicate category name for {cat.type.value}: {cat.name}"
            )
        index[cat.id] = cat
        names.add(key)
    return index


CATEGORY_INDEX: dict[str, Category] = _build_index(CATEGORIES)


def get_category(category_id: str) -> Category | None:
    return CATEGORY_INDEX.get(category_id)


def is_known_category(category_id: str) -> bool:
    return category_id in CATEGORY_INDEX


def get_category_by_name(name: str) -> Category | None:
    """Find a category by display name, ignoring case."""
    wanted = name.lower()
    for cat in CATEGORIES:
        if cat.name.lower() == wanted:
            return cat
    return None


def get_categories_by_type(type: TransactionType | str) -> list[Category]:
    return [cat for cat in CATEGORIES if cat.type == type]


def get_category_icon(id_or_name: str) -> CategoryIcon:
    """Icon for a category id or exact display name (credit-card if unknown)."""
    cat = CATEGORY_INDEX.get(id_or_name)
    if cat is None:
        cat = next((c for c in CATEGORIES if c.name == id_or_name), None)
    return cat.icon if cat else DEFAULT_ICON


def get_category_name(category_id: str) -> str:
    """Display name for an id; unknown ids are returned unchanged."""
    cat = CATEGORY_INDEX.get(category_id)
    return cat.name if cat else category_id

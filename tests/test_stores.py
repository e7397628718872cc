"""Tests for the category and expense stores."""

import threading
import pytest
from datetime import date

from moneybook.models.audit import AuditEventType
from moneybook.models.color import BLUE, GREEN, RED, darken
from moneybook.models.expense import DEFAULT_CATEGORY_NAME, Category, Expense
from moneybook.queries.periods import PeriodKind
from moneybook.stores import CategoryStore, ExpenseStore


def build_stores(*names):
    expense_store = ExpenseStore()
    category_store = CategoryStore(expense_store=expense_store)
    for name in names:
        category_store.add(Category(name=name))
    return category_store, expense_store


def scenario():
    """Three expenses: two Food, one Travel, across July and August 2024."""
    category_store, expense_store = build_stores("Food", "Travel")
    food = category_store.get_by_name("Food")
    travel = category_store.get_by_name("Travel")
    first = Expense(date=date(2024, 7, 25), amount=50.0, description="Groceries", category=food)
    second = Expense(date=date(2024, 7, 16), amount=200.0, location="Airport", category=travel)
    third = Expense(date=date(2024, 8, 11), amount=75.0, description="Dinner", category=food)
    for expense in (first, second, third):
        expense_store.add(expense)
    return category_store, expense_store, (first, second, third)


class TestCategoryStore:
    """Tests for CategoryStore."""

    def test_starts_with_default(self):
        """Test that a new store holds only the default category."""
        store = CategoryStore()
        assert store.names() == [DEFAULT_CATEGORY_NAME]
        assert store.default.is_default

    def test_add_duplicate_name_is_noop(self):
        """Test that adding the same name twice keeps one category."""
        store = CategoryStore()
        assert store.add(Category(name="Food")) is True
        size = len(store)
        assert store.add(Category(name="food", color=RED)) is False
        assert len(store) == size
        assert store.get_by_name("Food").color != RED

    def test_get_by_name_is_case_insensitive(self):
        """Test lookup ignores case and misses return None."""
        store, _ = build_stores("Food")
        assert store.get_by_name("FOOD").name == "Food"
        assert "food" in store
        assert store.get_by_name("Travel") is None
        assert store.get_by_name(None) is None

    def test_remove_default_is_noop(self):
        """Test that the default category survives removal unchanged."""
        store = CategoryStore()
        before = store.default.model_dump()
        assert store.remove(store.default) is False
        assert store.remove(Category(name=DEFAULT_CATEGORY_NAME.upper())) is False
        assert store.default.model_dump() == before

    def test_remove_reassigns_expenses_to_default(self):
        """Test deleting a category moves its expenses to the default."""
        category_store, expense_store, (_, travel_expense, _) = scenario()
        travel = category_store.get_by_name("Travel")
        assert category_store.remove(travel) is True
        assert travel_expense.category is category_store.default
        assert category_store.get_by_name("Travel") is None

    def test_remove_unknown_is_noop(self):
        """Test removing a category that is not stored."""
        store, _ = build_stores("Food")
        assert store.remove(Category(name="Travel")) is False
        assert len(store) == 2

    def test_update_in_place(self):
        """Test that update keeps the object and its id."""
        category_store, expense_store, (first, _, _) = scenario()
        food = category_store.get_by_name("Food")
        food_id = food.id
        assert category_store.update("Food", Category(name="Groceries", color=GREEN, limit=300)) is True
        assert category_store.get_by_name("Groceries") is food
        assert food.id == food_id
        assert food.limit == 300
        assert food.font_color == darken(GREEN)
        assert first.category is food
        assert first.category.name == "Groceries"

    def test_update_same_name_new_color(self):
        """Test that keeping the name (in any case) is allowed."""
        store, _ = build_stores("Food")
        assert store.update("food", Category(name="Food", color=BLUE)) is True
        assert store.get_by_name("Food").color == BLUE

    def test_update_default_is_noop(self):
        """Test that the default category cannot be edited."""
        store = CategoryStore()
        assert store.update(DEFAULT_CATEGORY_NAME, Category(name="Other", color=RED)) is False
        assert store.update(DEFAULT_CATEGORY_NAME.lower(), Category(name="Other")) is False
        assert store.default.name == DEFAULT_CATEGORY_NAME

    def test_update_name_taken_is_noop(self):
        """Test that renaming onto another category's name is refused."""
        store, _ = build_stores("Food", "Travel")
        assert store.update("Travel", Category(name="food")) is False
        assert store.get_by_name("Travel") is not None

    def test_update_missing_is_noop(self):
        """Test updating a name that does not exist."""
        store, _ = build_stores("Food")
        assert store.update("Travel", Category(name="Trips")) is False

    def test_replace_all_synthesizes_default(self):
        """Test that a bulk replace without the default adds it."""
        store = CategoryStore()
        store.replace_all([Category(name="Food"), Category(name="Travel")])
        assert store.names() == ["Food", "Travel", DEFAULT_CATEGORY_NAME]

    def test_replace_all_keeps_existing_default(self):
        """Test that a loaded default category is kept as is."""
        default = Category(name=DEFAULT_CATEGORY_NAME, color=RED)
        store = CategoryStore(categories=[default, Category(name="Food")])
        assert store.default is default
        assert len(store) == 2

    def test_replace_all_default_in_other_case(self):
        """Test that a loaded default spelled in another case is the default."""
        store = CategoryStore()
        store.replace_all([Category(name=DEFAULT_CATEGORY_NAME.upper())])
        assert len(store) == 1
        assert store.default.is_default is True
        assert store.remove(store.default) is False

    def test_replace_all_drops_duplicate_names(self):
        """Test that the first of two equally named categories wins."""
        first = Category(name="Food")
        store = CategoryStore()
        store.replace_all([first, Category(name="FOOD")])
        assert store.get_by_name("food") is first
        assert len(store) == 2

    def test_replace_all_with_none(self):
        """Test that replacing with nothing leaves only the default."""
        store, _ = build_stores("Food")
        store.replace_all(None)
        assert store.names() == [DEFAULT_CATEGORY_NAME]

    def test_sorted_for_display(self):
        """Test default first, then alphabetical."""
        store, _ = build_stores("travel", "Food", "bills")
        assert [c.name for c in store.sorted_for_display()] == [
            DEFAULT_CATEGORY_NAME, "bills", "Food", "travel",
        ]

    def test_events_are_published(self):
        """Test the publish/subscribe hook."""
        store = CategoryStore()
        events = []
        store.subscribe(events.append)
        store.add(Category(name="Food"))
        store.add(Category(name="Food"))
        store.update("Food", Category(name="Meals"))
        store.remove(store.get_by_name("Meals"))
        assert [e.event_type for e in events] == [
            AuditEventType.CATEGORY_ADDED,
            AuditEventType.CATEGORY_UPDATED,
            AuditEventType.CATEGORY_REMOVED,
        ]
        assert store.unsubscribe(events.append) is True
        assert store.unsubscribe(events.append) is False


class TestExpenseStore:
    """Tests for ExpenseStore."""

    def test_add_and_get(self):
        """Test adding and looking up by id."""
        store = ExpenseStore()
        expense = Expense(date=date(2024, 7, 25), amount=5.0)
        assert store.add(expense) is True
        assert store.get(expense.id) is expense
        assert len(store) == 1

    def test_add_same_id_twice_is_noop(self):
        """Test that an expense is stored once."""
        store = ExpenseStore()
        expense = Expense(date=date(2024, 7, 25), amount=5.0)
        store.add(expense)
        assert store.add(expense) is False
        assert len(store) == 1

    def test_update_replaces_by_id(self):
        """Test that update swaps the record with the same id."""
        store = ExpenseStore()
        expense = Expense(date=date(2024, 7, 25), amount=5.0)
        store.add(expense)
        edited = expense.model_copy(update={"amount": 9.0})
        assert store.update(edited) is True
        assert store.get(expense.id).amount == 9.0
        assert len(store) == 1

    def test_update_never_inserts(self):
        """Test that updating an unknown expense does nothing."""
        store = ExpenseStore()
        assert store.update(Expense(date=date(2024, 7, 25), amount=5.0)) is False
        assert len(store) == 0

    def test_remove(self):
        """Test removal by id."""
        store = ExpenseStore()
        expense = Expense(date=date(2024, 7, 25), amount=5.0)
        store.add(expense)
        assert store.remove(expense) is True
        assert store.remove(expense) is False
        assert len(store) == 0

    def test_query_category_and_month(self):
        """Test Food in July 2024 matches only the 25 July expense."""
        category_store, expense_store, (first, _, _) = scenario()
        food = category_store.get_by_name("Food")
        result = expense_store.query("", [food], PeriodKind.MONTH, date(2024, 7, 25))
        assert result == [first]

    def test_query_year(self):
        """Test that the whole year matches all three expenses."""
        _, expense_store, expenses = scenario()
        result = expense_store.query("", None, PeriodKind.YEAR, date(2024, 7, 25))
        assert result == list(expenses)

    def test_query_text(self):
        """Test case-insensitive text search without other filters."""
        _, expense_store, (first, second, _) = scenario()
        assert expense_store.query("groceries") == [first]
        assert expense_store.query("AIRPORT") == [second]
        assert expense_store.query("nothing like this") == []

    def test_query_without_filters_returns_copy(self):
        """Test that results are a new list in insertion order."""
        _, expense_store, expenses = scenario()
        result = expense_store.query()
        assert result == list(expenses)
        result.clear()
        assert len(expense_store) == 3

    def test_query_uncategorized_fails_category_filter(self):
        """Test that expenses without category fail a non-empty selection."""
        category_store, expense_store = build_stores("Food")
        expense_store.add(Expense(date=date(2024, 7, 25), amount=1.0))
        assert expense_store.query(selected_categories=[category_store.get_by_name("Food")]) == []
        assert len(expense_store.query(selected_categories=[])) == 1

    def test_query_week(self):
        """Test the week filter is inclusive on both ends."""
        store = ExpenseStore()
        monday = Expense(date=date(2024, 7, 22), amount=1.0)
        sunday = Expense(date=date(2024, 7, 28), amount=1.0)
        next_monday = Expense(date=date(2024, 7, 29), amount=1.0)
        for expense in (monday, sunday, next_monday):
            store.add(expense)
        assert store.query(period=PeriodKind.WEEK, reference_date=date(2024, 7, 25)) == [monday, sunday]

    def test_reassign_category(self):
        """Test moving every expense of one category to another."""
        category_store, expense_store, (first, second, third) = scenario()
        food = category_store.get_by_name("Food")
        travel = category_store.get_by_name("Travel")
        assert expense_store.reassign_category(food, travel) == 2
        assert first.category is travel
        assert third.category is travel
        assert second.category is travel

    def test_total(self):
        """Test summing amounts."""
        _, expense_store, (first, _, _) = scenario()
        assert expense_store.total() == 325.0
        assert expense_store.total([first]) == 50.0

    def test_concurrent_adds(self):
        """Test that parallel adds all land in the store."""
        store = ExpenseStore()

        def worker():
            for _ in range(100):
                store.add(Expense(date=date(2024, 7, 25), amount=1.0))

        threads = [threading.Thread(target=worker) for _ in range(4)]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()
        assert len(store) == 400
        assert store.total() == 400.0


if __name__ == "__main__":
    pytest.main([__file__, "-v"])

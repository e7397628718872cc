"""Tests for the application context: load, commit, save."""

import pytest
from datetime import date

from moneybook.context import AppContext, create_app_context
from moneybook.models.audit import AuditEventType
from moneybook.models.expense import DEFAULT_CATEGORY_NAME, Category, Expense
from moneybook.queries.periods import PeriodKind
from moneybook.services.storage import CATEGORIES, InMemoryStorage


def new_context(storage=None):
    return create_app_context(storage=storage or InMemoryStorage())


class TestLifecycle:
    """Tests for loading and saving."""

    def test_empty_storage(self):
        """Test a first start with nothing stored."""
        context = new_context()
        assert context.category_store.names() == [DEFAULT_CATEGORY_NAME]
        assert len(context.expense_store) == 0

    def test_save_and_reload(self):
        """Test that a second session sees the first session's data."""
        storage = InMemoryStorage()
        context = new_context(storage)
        food = Category(name="Food", limit=100)
        context.category_store.add(food)
        context.commit_expense(Expense(date=date.today(), amount=20, category=food))
        context.shutdown()

        reloaded = new_context(storage)
        live_food = reloaded.category_store.get_by_name("Food")
        assert live_food == food
        assert reloaded.expense_store.expenses[0].category is live_food

    def test_shutdown_ends_edit(self):
        """Test that shutdown saves and clears the session."""
        storage = InMemoryStorage()
        context = new_context(storage)
        context.begin_edit()
        context.shutdown()
        assert context.is_editing is False
        assert storage.raw(CATEGORIES)[0]["name"] == DEFAULT_CATEGORY_NAME

    def test_json_files(self, tmp_path):
        """Test the default JSON backend end to end."""
        context = create_app_context(data_dir=tmp_path)
        context.commit_expense(Expense(date=date.today(), amount=5))
        context.save()
        assert (tmp_path / "categories.json").exists()
        assert (tmp_path / "expenses.json").exists()

        reloaded = create_app_context(data_dir=tmp_path)
        assert reloaded.expense_store.expenses[0].category is reloaded.category_store.default

    def test_audit_trail(self):
        """Test that store changes reach the audit logger."""
        context = new_context()
        context.category_store.add(Category(name="Food"))
        types = [event.event_type for event in context.audit_logger.recent()]
        assert types[0] == AuditEventType.CATEGORY_ADDED
        assert AuditEventType.CATEGORIES_REPLACED in types


class TestExpenseSession:
    """Tests for begin_edit / end_edit."""

    def test_begin_new(self):
        """Test starting a new expense."""
        context = new_context()
        expense = context.begin_edit()
        assert context.is_editing
        assert context.current_expense is expense
        assert expense.category is context.category_store.default
        assert expense.date == date.today()

    def test_begin_existing_and_end(self):
        """Test editing an existing expense."""
        context = new_context()
        expense = Expense(date=date.today(), amount=1)
        context.begin_edit(expense)
        assert context.current_expense is expense
        context.end_edit()
        assert context.current_expense is None


class TestCommit:
    """Tests for limit-gated commits."""

    def setup_context(self):
        context = new_context()
        food = Category(name="Food", limit=100)
        context.category_store.add(food)
        context.commit_expense(Expense(date=date.today(), amount=80, category=food))
        return context, food

    def test_uncategorized_gets_default(self):
        """Test that a commit without category assigns the default."""
        context = new_context()
        expense = Expense(date=date.today(), amount=10)
        check = context.commit_expense(expense)
        assert check.within_limit
        assert expense.category is context.category_store.default
        assert context.expense_store.get(expense.id) is expense

    def test_over_limit_needs_confirmation(self):
        """Test that an over-limit expense is held back until confirmed."""
        context, food = self.setup_context()
        expense = Expense(date=date.today(), amount=30, category=food)
        check = context.commit_expense(expense)
        assert check.within_limit is False
        assert check.overage_amount == pytest.approx(10)
        assert context.expense_store.get(expense.id) is None

        context.commit_expense(expense, confirmed=True)
        assert context.expense_store.get(expense.id) is expense

    def test_edit_excludes_own_amount(self):
        """Test that editing an expense does not count it twice."""
        context, food = self.setup_context()
        stored = context.expense_store.expenses[0]
        edited = stored.model_copy(update={"amount": 95})
        check = context.commit_expense(edited)
        assert check.within_limit is True
        assert check.spent == 0
        assert context.expense_store.get(stored.id).amount == 95
        assert len(context.expense_store) == 1

    def test_commit_ends_matching_edit(self):
        """Test that committing the edited expense closes the session."""
        context = new_context()
        expense = context.begin_edit()
        expense.amount = 4
        context.commit_expense(expense)
        assert context.is_editing is False


class TestVisibleExpenses:
    """Tests for cursor-driven queries."""

    def test_cursor_filters_period(self):
        """Test that the cursor's period limits the visible expenses."""
        context = new_context()
        july = Expense(date=date(2024, 7, 25), amount=1, description="Groceries")
        august = Expense(date=date(2024, 8, 11), amount=1)
        context.commit_expense(july)
        context.commit_expense(august)

        assert len(context.visible_expenses()) == 2
        context.cursor.select(PeriodKind.MONTH)
        context.cursor.jump_to(date(2024, 7, 1))
        assert context.visible_expenses() == [july]
        assert context.visible_expenses(search_text="dinner") == []


class TestAppContextDirect:
    """Tests for building a context without the factory."""

    def test_not_loaded_until_asked(self):
        """Test that the constructor does not touch storage."""
        storage = InMemoryStorage()
        seeded = new_context(storage)
        seeded.category_store.add(Category(name="Food"))
        seeded.save()

        context = AppContext(storage)
        assert "Food" not in context.category_store
        context.load()
        assert "Food" in context.category_store


if __name__ == "__main__":
    pytest.main([__file__, "-v"])

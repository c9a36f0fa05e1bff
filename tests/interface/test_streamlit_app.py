"""Tests for the Streamlit app module."""

from dataclasses import replace
from datetime import date
from decimal import Decimal

from finance_tracker.adapters.interface.streamlit import app
from finance_tracker.application.use_cases.add_transaction import (
    AddTransactionResult,
)
from finance_tracker.application.use_cases.authenticate import AuthResult
from finance_tracker.domain.models import (
    AppState,
    Authenticated,
    Screen,
    Transaction,
    TransactionKind,
)
from finance_tracker.domain.services.views import (
    EMPTY_HISTORY_MESSAGE,
    build_dashboard_view,
    build_history_view,
)


class _FakeForm:
    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb):
        return False


class _FakeColumn:
    def __init__(self, st) -> None:
        self._st = st

    def metric(self, label, value, *args, **kwargs):
        self._st.metrics.append((label, value))


class _FakeSidebar:
    def __init__(self, st) -> None:
        self._st = st

    def radio(self, label, options, index=0, **kwargs):
        return self._st.radio(label, options, index=index)

    def button(self, label, **kwargs):
        return self._st.button(label)


class _FakeStreamlit:
    def __init__(self, inputs=None, clicked=(), choices=None) -> None:
        self.session_state = {}
        self.inputs = inputs or {}
        self.clicked = set(clicked)
        self.choices = choices or {}
        self.sidebar = _FakeSidebar(self)
        self.titles: list[str] = []
        self.errors: list[str] = []
        self.infos: list[str] = []
        self.captions: list[str] = []
        self.metrics: list[tuple[str, str]] = []
        self.tables: list = []
        self.rerun_called = False
        self.page_config = None

    def set_page_config(self, **kwargs):
        self.page_config = kwargs

    def title(self, text):
        self.titles.append(text)

    def subheader(self, text):
        pass

    def radio(self, label, options, index=0, **kwargs):
        return self.choices.get(label, options[index])

    def form(self, key, **kwargs):
        return _FakeForm()

    def text_input(self, label, **kwargs):
        return self.inputs.get(label, "")

    def form_submit_button(self, label, **kwargs):
        return label in self.clicked

    def button(self, label, **kwargs):
        return label in self.clicked

    def error(self, text):
        self.errors.append(text)

    def info(self, text):
        self.infos.append(text)

    def caption(self, text):
        self.captions.append(text)

    def columns(self, count):
        return [_FakeColumn(self) for _ in range(count)]

    def dataframe(self, data, **kwargs):
        self.tables.append(data)

    def rerun(self):
        self.rerun_called = True


class _StubSession:
    currency_symbol = "R$"

    def __init__(self, state: AppState) -> None:
        self.state = state
        self.calls: list[tuple] = []
        self.auth_result = AuthResult(success=True, user_id="u1")
        self.submit_result = AddTransactionResult(transaction=None)

    def sign_in(self, email, password):
        self.calls.append(("sign_in", email, password))
        return self.auth_result

    def sign_up(self, email, password):
        self.calls.append(("sign_up", email, password))
        return self.auth_result

    def sign_out(self):
        self.calls.append(("sign_out",))

    def select_screen(self, screen):
        self.calls.append(("select_screen", screen))
        self.state = replace(self.state, screen=screen)
        return self.state

    def open_add_form(self):
        self.state = replace(self.state, add_form_open=True)
        return self.state

    def close_add_form(self):
        self.calls.append(("close_add_form",))
        self.state = replace(self.state, add_form_open=False)
        return self.state

    def submit_transaction(self, description, amount, kind, category):
        self.calls.append(("submit", description, amount, kind, category))
        return self.submit_result

    def dashboard_view(self):
        return build_dashboard_view(self.state.transactions)

    def history_view(self):
        return build_history_view(self.state.transactions)


def _signed_in(**overrides) -> AppState:
    values = {
        "session": Authenticated("u1"),
        "transactions": (
            Transaction(
                id="k2",
                description="Lunch",
                amount=Decimal("650"),
                kind=TransactionKind.EXPENSE,
                date="02/01/2024",
                category="Food",
            ),
            Transaction(
                id="k1",
                description="Salary",
                amount=Decimal("4500"),
                kind=TransactionKind.INCOME,
                date="01/01/2024",
                category="Work",
            ),
        ),
    }
    values.update(overrides)
    return AppState(**values)


def _run(monkeypatch, fake_st, session):
    monkeypatch.setattr(app, "st", fake_st)
    monkeypatch.setattr(app, "_get_session", lambda: session)
    app.main()


def test_get_session_builds_once(monkeypatch):
    fake_st = _FakeStreamlit()
    built = []

    def fake_build():
        built.append(1)
        return "session"

    monkeypatch.setattr(app, "st", fake_st)
    monkeypatch.setattr(app, "_build_session", fake_build)

    assert app._get_session() == "session"
    assert app._get_session() == "session"
    assert built == [1]


def test_login_failure_shows_error(monkeypatch):
    session = _StubSession(AppState())
    session.auth_result = AuthResult(success=False, message="Error: bad")
    fake_st = _FakeStreamlit(
        inputs={"Email": "ana@example.com", "Password": "x"},
        clicked={"Sign in"},
    )

    _run(monkeypatch, fake_st, session)

    assert fake_st.page_config["page_title"] == "Personal Finance"
    assert session.calls == [("sign_in", "ana@example.com", "x")]
    assert fake_st.errors == ["Error: bad"]
    assert fake_st.rerun_called is False


def test_create_account_mode_signs_up(monkeypatch):
    session = _StubSession(AppState())
    fake_st = _FakeStreamlit(
        inputs={"Email": "ana@example.com", "Password": "secret1"},
        clicked={"Create account"},
        choices={"Mode": "Create account"},
    )

    _run(monkeypatch, fake_st, session)

    assert session.calls == [("sign_up", "ana@example.com", "secret1")]
    assert fake_st.rerun_called is True


def test_dashboard_renders_totals_and_recent(monkeypatch):
    session = _StubSession(_signed_in())
    fake_st = _FakeStreamlit()

    _run(monkeypatch, fake_st, session)

    assert fake_st.titles == ["Overview"]
    assert fake_st.metrics == [
        ("Balance", "R$ 3850.00"),
        ("Income", "R$ 4500.00"),
        ("Expenses", "R$ 650.00"),
    ]
    assert fake_st.tables[0][0] == {
        "Description": "Lunch",
        "Details": "Food - 02/01/2024",
        "Amount": "- R$ 650.00",
    }


def test_loading_state_shows_indicator(monkeypatch):
    session = _StubSession(_signed_in(transactions=(), is_loading=True))
    fake_st = _FakeStreamlit()

    _run(monkeypatch, fake_st, session)

    assert "Loading transactions..." in fake_st.infos


def test_history_shows_empty_message(monkeypatch):
    session = _StubSession(_signed_in(transactions=()))
    fake_st = _FakeStreamlit(choices={"Navigate": "History"})

    _run(monkeypatch, fake_st, session)

    assert ("select_screen", Screen.TRANSACTIONS) in session.calls
    assert fake_st.titles == ["History"]
    assert EMPTY_HISTORY_MESSAGE in fake_st.infos


def test_add_form_shows_validation_errors(monkeypatch):
    session = _StubSession(_signed_in(add_form_open=True))
    session.submit_result = AddTransactionResult(
        transaction=None,
        errors=("Description is required.",),
    )
    fake_st = _FakeStreamlit(
        inputs={"Amount": "10", "Category": "Food"},
        clicked={"Save"},
    )

    _run(monkeypatch, fake_st, session)

    assert ("submit", "", "10", TransactionKind.EXPENSE, "Food") in session.calls
    assert fake_st.errors == ["Description is required."]
    assert fake_st.rerun_called is False


def test_add_button_opens_form_and_saves(monkeypatch):
    session = _StubSession(_signed_in())
    session.submit_result = AddTransactionResult(
        transaction=Transaction(
            id="k3",
            description="Bonus",
            amount=Decimal("12.50"),
            kind=TransactionKind.INCOME,
            date=date(2024, 1, 3).strftime("%d/%m/%Y"),
            category="Work",
        )
    )
    fake_st = _FakeStreamlit(
        inputs={"Description": "Bonus", "Amount": "12,50", "Category": "Work"},
        clicked={"Add transaction", "Save"},
        choices={"Type": "Income"},
    )

    _run(monkeypatch, fake_st, session)

    assert session.state.add_form_open is True
    assert (
        "submit",
        "Bonus",
        "12,50",
        TransactionKind.INCOME,
        "Work",
    ) in session.calls
    assert fake_st.rerun_called is True


def test_cancel_closes_form(monkeypatch):
    session = _StubSession(_signed_in(add_form_open=True))
    fake_st = _FakeStreamlit(clicked={"Cancel"})

    _run(monkeypatch, fake_st, session)

    assert ("close_add_form",) in session.calls
    assert fake_st.rerun_called is True


def test_settings_sign_out(monkeypatch):
    session = _StubSession(_signed_in())
    fake_st = _FakeStreamlit(
        clicked={"Sign out"},
        choices={"Navigate": "Settings"},
    )

    _run(monkeypatch, fake_st, session)

    assert "Signed in as u1" in fake_st.captions
    assert ("sign_out",) in session.calls
    assert fake_st.rerun_called is True

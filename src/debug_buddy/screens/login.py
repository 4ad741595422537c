"""Login / registration screen."""

from textual import on
from textual.app import ComposeResult
from textual.containers import Center, Vertical
from textual.screen import Screen
from textual.widgets import (
    Button,
    Footer,
    Header,
    Input,
    Label,
    Static,
    TabbedContent,
    TabPane,
)

from debug_buddy.errors import DebugBuddyError


class LoginScreen(Screen):
    """Log in to an existing account or create a new one."""

    CSS = """
    LoginScreen {
        align: center middle;
    }
    #login-container {
        width: 64;
        height: auto;
        padding: 1 4;
        border: round $primary;
        background: $surface;
    }
    #login-title {
        text-align: center;
        text-style: bold;
        color: $accent;
        margin-bottom: 1;
    }
    .field-label {
        margin-top: 1;
    }
    .submit-btn {
        margin-top: 2;
        width: 100%;
    }
    #auth-error {
        color: $error;
        text-align: center;
        margin-top: 1;
    }
    """

    def compose(self) -> ComposeResult:
        yield Header(show_clock=True)
        with Center():
            with Vertical(id="login-container"):
                yield Static("🐞  Debug Buddy", id="login-title")
                with TabbedContent("Log in", "Sign up", id="auth-tabs"):
                    with TabPane("Log in"):
                        yield Label("Username:", classes="field-label")
                        yield Input(id="login-username")
                        yield Label("Password:", classes="field-label")
                        yield Input(password=True, id="login-password")
                        yield Button("Log in", id="login-btn", classes="submit-btn", variant="primary")
                    with TabPane("Sign up"):
                        yield Label("Username:", classes="field-label")
                        yield Input(id="register-username")
                        yield Label("Email:", classes="field-label")
                        yield Input(id="register-email")
                        yield Label("Password (min. 6 characters):", classes="field-label")
                        yield Input(password=True, id="register-password")
                        yield Button("Create account", id="register-btn", classes="submit-btn", variant="primary")
                yield Label("", id="auth-error")
        yield Footer()

    def _value(self, widget_id: str) -> str:
        return self.query_one(f"#{widget_id}", Input).value.strip()

    def _show_error(self, message: str) -> None:
        self.query_one("#auth-error", Label).update(f"⚠  {message}")

    @on(Button.Pressed, "#login-btn")
    @on(Input.Submitted, "#login-password")
    def login(self) -> None:
        app = self.app
        try:
            app.accounts.login(  # type: ignore[attr-defined]
                app.session,  # type: ignore[attr-defined]
                self._value("login-username"),
                self.query_one("#login-password", Input).value,
            )
        except DebugBuddyError as e:
            self._show_error(e.message)
            return
        app.show_home()  # type: ignore[attr-defined]

    @on(Button.Pressed, "#register-btn")
    @on(Input.Submitted, "#register-password")
    def register(self) -> None:
        app = self.app
        try:
            app.accounts.register(  # type: ignore[attr-defined]
                app.session,  # type: ignore[attr-defined]
                self._value("register-username"),
                self._value("register-email"),
                self.query_one("#register-password", Input).value,
            )
        except DebugBuddyError as e:
            self._show_error(e.message)
            return
        app.show_home()  # type: ignore[attr-defined]

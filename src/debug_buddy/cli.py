"""CLI entry point for debug-buddy."""


def main() -> None:
    """Launch the Debug Buddy TUI."""
    from dotenv import load_dotenv

    load_dotenv()  # Load .env file (e.g. GITHUB_TOKEN, DEBUG_BUDDY_DATA_DIR)

    from debug_buddy.app import DebugBuddyApp
    from debug_buddy.config import load_settings
    from debug_buddy.errors import DebugBuddyError
    from debug_buddy.logging_config import setup_logging

    try:
        settings = load_settings()
    except DebugBuddyError as e:
        raise SystemExit(f"debug-buddy: {e.message}") from None
    setup_logging(settings.log_level, settings.log_file, tui=True)

    app = DebugBuddyApp(settings=settings)
    app.run()


if __name__ == "__main__":
    main()

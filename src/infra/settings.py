import os

class Settings:
    ADMIN_USER = os.getenv("ADMIN_USER", "admin")
    ADMIN_PASS = os.getenv("ADMIN_PASS", "")

    DATABASE_URL = os.getenv("DATABASE_URL", "sqlite:///./pizzeria.db")
    LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")

    # catalog file; written from the built-in menu when missing
    MENU_JSON = os.getenv("PIZZA_MENU_JSON", "data/menu.json")

    # 0 = no limit on topping replacements per pizza
    MAX_REPLACEMENTS = int(os.getenv("MAX_REPLACEMENTS", "0"))

settings = Settings()

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    APP_NAME: str = "catering-pricing"
    LOG_LEVEL: str = "INFO"

    # Philadelphia combined sales tax
    TAX_RATE: float = 0.08
    DEFAULT_GUEST_COUNT: int = 10

    # Removal credits may never exceed this share of the package base price
    MAX_REMOVAL_CREDIT_PERCENTAGE: float = 0.20

    # Performance budgets (milliseconds)
    CALCULATION_BUDGET_MS: float = 50.0
    TOTAL_UPDATE_BUDGET_MS: float = 100.0

    class Config:
        env_file = ".env"


settings = Settings()

"""CategoryConfig class for recommended service intervals."""


class CategoryConfig:
    """Recommended service interval for one maintenance category."""

    def __init__(self, name: str, description: str, interval_days: int):
        self.name = name
        self.description = description
        self.interval_days = interval_days

    def __repr__(self) -> str:
        return f"CategoryConfig({self.name!r}, interval_days={self.interval_days})"

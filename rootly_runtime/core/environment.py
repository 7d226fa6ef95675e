"""Environment tag normalization.

Single source of truth for the environment label attached to every report.
"""

from typing import FrozenSet, Optional


class Environment:
    """Collector environment tags."""

    PRODUCTION = "production"
    PREVIEW = "preview"

    # Values accepted as production (compared lowercased and trimmed)
    _PRODUCTION_ALIASES: FrozenSet[str] = frozenset({"production", "prod"})

    @classmethod
    def normalize(cls, env: Optional[str]) -> str:
        """Map an arbitrary environment name to 'production' or 'preview'.

        Args:
            env: Raw environment name, may be None

        Returns:
            'production' for production/prod (any case), otherwise 'preview'.
        """
        if not isinstance(env, str):
            return cls.PREVIEW
        if env.strip().lower() in cls._PRODUCTION_ALIASES:
            return cls.PRODUCTION
        return cls.PREVIEW

    @classmethod
    def resolve(cls, *candidates: Optional[str]) -> str:
        """Normalize the first non-empty candidate, 'preview' if there is none."""
        for value in candidates:
            if isinstance(value, str) and value.strip():
                return cls.normalize(value)
        return cls.PREVIEW

    @classmethod
    def is_production(cls, env: Optional[str]) -> bool:
        """Check if the environment name normalizes to production."""
        return cls.normalize(env) == cls.PRODUCTION

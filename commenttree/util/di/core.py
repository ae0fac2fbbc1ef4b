"""Core DI providers (non-mockable)."""

from dishka import Scope, provide

from commenttree.config import CommentSettings, Settings
from commenttree.util.di.base import ProviderBase


class ProdConfigProvider(ProviderBase):
    """Production config provider.

    Settings are loaded from environment variables and .env file automatically.
    """

    scope = Scope.APP

    @provide
    def provide_settings(self) -> Settings:
        """Provide application settings from environment."""
        return Settings()

    @provide
    def provide_comment_settings(self, settings: Settings) -> CommentSettings:
        """Provide comment listing and presentation settings."""
        return settings.comments

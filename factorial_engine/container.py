from dependency_injector import containers, providers

from .engine import FactorialEngine
from .models import EngineSettings


class Container(containers.DeclarativeContainer):
    """DI container wiring environment-derived settings into a shared engine."""

    settings = providers.Singleton(EngineSettings.from_env)

    engine = providers.Singleton(FactorialEngine, settings=settings)

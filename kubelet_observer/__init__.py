from .main import run

__version__ = "dev"
__all__ = ["run", "__version__"]

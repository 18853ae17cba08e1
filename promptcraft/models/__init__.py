from .collection import Collection
from .prompt import Prompt

__all__ = ['Collection', 'Prompt']

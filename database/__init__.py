# database/__init__.py

from .manager import KeyValueStore, StoreError

__all__ = ['KeyValueStore', 'StoreError']

from . import topology

__all__ = ['topology']

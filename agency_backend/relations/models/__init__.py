from .relation import Relation

__all__ = ["Relation"]

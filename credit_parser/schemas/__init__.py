from .relationships import RelationshipEdit, TargetType

__all__ = ["RelationshipEdit", "TargetType"]

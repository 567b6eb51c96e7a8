"""Dependency graph data model."""

from .model import DependencyEdge, DependencyGraph, ModuleKind, ModuleNode

__all__ = ["DependencyEdge", "DependencyGraph", "ModuleKind", "ModuleNode"]

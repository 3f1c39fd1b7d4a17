"""
Collectors Package.

Read-only GitLab metric collectors and their registry.
"""

from .base import BaseCollector, total_from_page
from .project_count import ProjectCountCollector
from .member_count import MemberCountCollector
from .registry import CollectorRegistry, create_default_registry


__all__ = [
    # Base
    "BaseCollector",
    "total_from_page",
    
    # Collectors
    "ProjectCountCollector",
    "MemberCountCollector",
    
    # Registry
    "CollectorRegistry",
    "create_default_registry",
]

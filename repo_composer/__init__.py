"""
Repo Composer

Builds a public skeleton of a private source tree: private regions
marked by comment directives are hidden or replaced with placeholders,
stale top-level entries are pruned, and a workspace manifest is written.
"""

__version__ = "0.1.0"

from .directives import Directive, DirectiveKind, DirectiveParser, DirectiveProperty
from .manifest import Manifest, SyntaxConfig
from .synchronizer import SyncReport, TreeSynchronizer
from .transformer import PrivateRegion, Transformer
from .workspace import write_workspace

__all__ = [
    "Directive",
    "DirectiveKind",
    "DirectiveParser",
    "DirectiveProperty",
    "Manifest",
    "SyntaxConfig",
    "SyncReport",
    "TreeSynchronizer",
    "PrivateRegion",
    "Transformer",
    "write_workspace",
]

"""Desugar <if>, <else-if>, <else>, <for> and <let> JSX elements into expressions."""

import logging

# Configuration
from jsx_if_for.config import Construct as Construct
from jsx_if_for.config import TransformOptions as TransformOptions

# Debug output
from jsx_if_for.debug import pretty as pretty

# Errors
from jsx_if_for.errors import TransformError as TransformError

# ESTree conversion
from jsx_if_for.estree import from_estree as from_estree
from jsx_if_for.estree import to_estree as to_estree

# Nodes
from jsx_if_for.nodes import Node as Node
from jsx_if_for.nodes import emit as emit

# Pass
from jsx_if_for.transform import transform as transform
from jsx_if_for.version import __version__ as __version__

# Walker
from jsx_if_for.walker import NodePath as NodePath
from jsx_if_for.walker import walk as walk

logging.getLogger(__name__).addHandler(logging.NullHandler())

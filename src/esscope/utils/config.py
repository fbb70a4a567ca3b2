"""
Configuration constants used throughout esscope
"""

import os
import re
import tempfile

# Generated identifier naming
NAME_PREFIX = "$__"  # Reserved prefix of every name minted by unique_identifier
NAME_SEPARATOR = "$"  # Replaces characters outside the identifier-safe alphabet
IDENTIFIER_SAFE_PATTERN = re.compile(r"[^A-Za-z0-9_$]")  # Characters to replace in descriptive names
FIRST_NUMERIC_SUFFIX = 0

# Injection
SHARED_DECLARATION_KIND = "var"  # Keyword of injected variable and shared declarations
DIRECTIVE_VALUES = ("use strict", "use asm")  # Prologue directives kept ahead of injected declarations

# Parser configuration (cache under temp dir to avoid cluttering project root)
DEFAULT_PARSER_CACHE_FILE = os.path.join(tempfile.gettempdir(), "esscope_parser.cache")
DEFAULT_SOURCE_NAME = "<input>"

# Printer
INDENT = "  "

# File encoding constants
DEFAULT_FILE_ENCODING = "utf-8"

# Error codes
PARSE_ERROR_CODE = "E0001"
IO_ERROR_CODE = "E0002"

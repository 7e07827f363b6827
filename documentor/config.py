"""
Configuration constants for C# EventSource extraction.

Defines the tree-sitter-c-sharp node type strings and the conventional
EventSource annotation names used when no settings file overrides them.
"""

from typing import Set, Tuple

# Namespace declaration node types
NAMESPACE_NODE: str = "namespace_declaration"
FILE_SCOPED_NAMESPACE_NODE: str = "file_scoped_namespace_declaration"

# Declarations we look at inside a namespace / class body
CLASS_NODE: str = "class_declaration"
METHOD_NODE: str = "method_declaration"
FIELD_NODE: str = "field_declaration"
BASE_LIST_NODE: str = "base_list"

# Attribute syntax
ATTRIBUTE_LIST_NODE: str = "attribute_list"
ATTRIBUTE_NODE: str = "attribute"
ATTRIBUTE_ARGUMENT_LIST_NODE: str = "attribute_argument_list"
ATTRIBUTE_ARGUMENT_NODE: str = "attribute_argument"

# Older grammars wrap argument names in these nodes
NAME_EQUALS_NODE: str = "name_equals"
NAME_COLON_NODE: str = "name_colon"

# Field declarators
VARIABLE_DECLARATION_NODE: str = "variable_declaration"
VARIABLE_DECLARATOR_NODE: str = "variable_declarator"
EQUALS_VALUE_CLAUSE_NODE: str = "equals_value_clause"

# Expression shapes understood by the resolver
IDENTIFIER_NODE: str = "identifier"
MEMBER_ACCESS_NODE: str = "member_access_expression"
QUALIFIED_NAME_NODE: str = "qualified_name"
INTEGER_LITERAL_NODE: str = "integer_literal"
REAL_LITERAL_NODE: str = "real_literal"
STRING_LITERAL_NODE: str = "string_literal"
VERBATIM_STRING_LITERAL_NODE: str = "verbatim_string_literal"
RAW_STRING_LITERAL_NODE: str = "raw_string_literal"

# Wrappers that are resolved through, never evaluated
TRANSPARENT_EXPRESSIONS: Set[str] = {
    "cast_expression",
    "parenthesized_expression",
}

# Comment node type (includes //, ///, /* */)
COMMENT_NODE: str = "comment"

# XML documentation comment marker
DOC_COMMENT_PREFIX: str = "///"

# Preprocessor wrappers whose children are still namespace members
PREPROCESSOR_CONTAINERS: Set[str] = {
    "preproc_if",
    "preproc_elif",
    "preproc_else",
}

# Conventional EventSource names
DEFAULT_MARKER_TYPE: str = "EventSource"
DEFAULT_SOURCE_ATTRIBUTE: str = "EventSource"
DEFAULT_EVENT_ATTRIBUTE: str = "Event"
DEFAULT_NAME_ARGUMENT: str = "Name"
DEFAULT_ID_ARGUMENT: str = "Id"
DEFAULT_LEVEL_ARGUMENT: str = "Level"
DEFAULT_EVENT_ID: str = ""
DEFAULT_EVENT_LEVEL: str = "Informational"
DEFAULT_SUMMARY_SECTION: str = "summary"
DEFAULT_RESOLUTION_SECTION: str = "resolution"
DEFAULT_LINE_SEPARATOR: str = "\n"

# Synthetic root element wrapped around doc comment text
DOC_COMMENT_ROOT: str = "comments"

# C# file extensions
CSHARP_EXTENSIONS: Set[str] = {
    ".cs",
}

# Directories never searched for sources
SKIPPED_DIRECTORIES: Set[str] = {
    "bin",
    "obj",
    "packages",
    "node_modules",
    "TestResults",
    "__pycache__",
}

# CSV header, one column per EventRecord field
CSV_COLUMNS: Tuple[str, ...] = (
    "EventName",
    "EventId",
    "EventLevel",
    "Description",
    "Resolution",
)

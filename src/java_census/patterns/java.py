"""Tree-sitter queries for Java construct counting.

Each query exposes exactly one capture that names the counted identifier.
"""

# Method declarations (constructors are not methods in the grammar)
METHOD_QUERY = """
[
  (method_declaration
    name: (identifier) @method.name)
]
"""

# Local and field variable declarators; one match per declarator
VARIABLE_QUERY = """
[
  (local_variable_declaration
    declarator: (variable_declarator
      name: (identifier) @variable.name))
  (field_declaration
    declarator: (variable_declarator
      name: (identifier) @variable.name))
]
"""

METHOD_CAPTURE = "method.name"
VARIABLE_CAPTURE = "variable.name"

"""stardestroyer - Remove marked code blocks from a JavaScript project.

Blocks are declared in destroy.config.json and marked in source files
with ``$$BLOCKNAME`` comments.
"""

__version__ = "0.1.0"

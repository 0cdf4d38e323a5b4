"""StringTree: typed Swift and Objective-C accessors for localization tables.

Subpackages:
    parsers: Table loading and printf-style specifier parsing.
    core: Argument inference, the key tree and the generation pipeline.
    emitters: Swift and Objective-C code generation.
    utils: Error types and the atomic output writer.
"""

__version__ = "1.0.0"

"""
Cross-cutting infrastructure: configuration, logging, database
bootstrap and the error taxonomy.
"""

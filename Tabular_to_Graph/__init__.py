"""
Tabular to Graph: infer a node/relationship mapping for CSV or Excel tables and
export them as Cypher, Gremlin or JSON.
"""

__version__ = "0.1.0"

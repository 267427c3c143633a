"""Pipeline nodes for the Tabular to Graph converter."""

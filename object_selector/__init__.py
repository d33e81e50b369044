"""Object selector query service.

Server side of the object selector control: validates selector query
descriptions, runs them against the content store, and shapes the results
into flat paginated lists or depth-annotated page trees.
"""

__version__ = "1.0.0"

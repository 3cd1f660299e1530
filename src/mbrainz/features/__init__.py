"""
Summary: Request composition features (search, includes, requests).
Why: Group the pure, network-free parts of the client pipeline.
"""

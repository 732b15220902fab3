"""
Core utilities — domain exceptions shared by the aggregator and API server.
"""

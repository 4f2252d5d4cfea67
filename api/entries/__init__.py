"""
Blog entries feature: schema, validation, request decoding, SQL and routes.
"""

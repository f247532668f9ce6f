"""
Dash UI: app factory, layout builders and callback registration.
"""

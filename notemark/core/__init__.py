"""
Core services for notemark: paths, configuration, logging and exceptions.
"""

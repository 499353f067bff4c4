"""
Command line interface for macro-contract.
"""

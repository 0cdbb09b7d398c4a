"""
Core inlinejs types: IR, naming, configuration, and errors.
"""

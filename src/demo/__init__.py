"""
MNIST demo driver: command line entry point and logging setup.
"""

"""tfmhook - webhook-driven repository refresh and container restart agent"""
__version__ = "0.1.0"

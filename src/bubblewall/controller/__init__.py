"""
The CONTROLLER layer drives the bubbles over time.
It mutates the Layout frame by frame and hands every frame to a sink.
"""

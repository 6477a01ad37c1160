"""
The MODEL layer contains pure data structures and layout logic.
It has NO knowledge of the GUI (Qt) or the animation loop.
It deals with Geometry, Colors and the Bubble Layout.
"""

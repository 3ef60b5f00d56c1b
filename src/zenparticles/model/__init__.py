"""
The MODEL layer contains pure data structures and sampling logic.
It has NO knowledge of the GUI (Qt) or the Visualization (PyVista),
except for the frame exporter in ``io``.
"""

"""Cartoclip - Clip map paths against closed boundaries.

Cartoclip crops vector paths made of lines, circular arcs, meridians and
parallels to a closed boundary, either on the infinite plane or on the
periodic latitude/longitude domain of a sphere, and stitches the surviving
pieces back together into closed outlines.

Example:
    $ cartoclip clip coastline.txt map-edges.txt --periodic --close-path

This prints the coastline cropped to the map edges, with the edges traced in
wherever the coastline leaves the map.
"""

__version__ = "0.1.0"
__author__ = "Dimosthenis Kaponis"

__all__ = ["__author__", "__version__"]

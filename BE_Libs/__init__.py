"""
BE_Libs - BG Eraser Library Modules

This package contains the background removal engine, organized into
specialized sub-packages:

- RasterLib: Pixel buffer model, color matching and alpha feathering
- RemovalLib: Automatic background removers (flood fill, border model)
- LayersLib: Base/mask compositing and brush-based manual editing
- SessionLib: Editing session, settings and undo history
"""

__version__ = "0.1.0"

"""Image-processing nodes (load, brightness/contrast, channel split, blur) chained into a graph, with dialogs and a command."""

__version__ = "0.1.0"
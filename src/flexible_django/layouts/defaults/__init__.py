from .wysiwyg import WysiwygLayout

DEFAULT_LAYOUTS = {
    WysiwygLayout.name: WysiwygLayout,
}

__all__ = ["DEFAULT_LAYOUTS", "WysiwygLayout"]

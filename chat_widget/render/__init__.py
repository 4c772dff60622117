from .markup import IMAGE_PATTERN, SafeHtml, render_message, rewrite_images

__all__ = ["IMAGE_PATTERN", "SafeHtml", "render_message", "rewrite_images"]

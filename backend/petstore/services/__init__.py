"""Services — use cases orchestrating core logic around infrastructure IO."""

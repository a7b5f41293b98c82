"""Section context (heading breadcrumb and nearby content) of an element."""

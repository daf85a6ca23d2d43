"""Request pipeline building blocks: middleware chain, headers, identity, access, paths."""

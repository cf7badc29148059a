"""Client-side browse state: debounced search, infinite scroll, local filters."""

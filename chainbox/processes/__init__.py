"""Base and concrete process types, and the chains and builder that connect them."""
"""Link shortener service: short codes, redirects and click counting."""

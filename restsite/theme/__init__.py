"""Server-side page templates of the Rest theme."""

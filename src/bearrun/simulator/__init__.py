"""Desktop front-end for BEAR RUN."""

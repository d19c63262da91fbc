"""Infrastructure: document store transport and its exceptions."""

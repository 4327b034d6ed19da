"""Config subpackage - paths and sheet layout defaults."""

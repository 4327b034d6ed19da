"""Reports subpackage - sheet health report and flat table exports."""

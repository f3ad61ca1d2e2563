"""Discord relay: forward allow-listed channel activity to an n8n webhook."""

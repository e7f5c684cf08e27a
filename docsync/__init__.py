"""Watch a local org document and publish it to Google Docs."""

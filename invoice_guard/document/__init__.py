"""
PDF writing for invoices.

`writer.py` holds the drawing capability the marker code talks to;
`layout.py` draws the visible invoice on top of it.
"""

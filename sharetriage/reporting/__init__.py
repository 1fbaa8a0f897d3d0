# sharetriage/reporting: HTML and CSV renderers plus the composer that writes them.

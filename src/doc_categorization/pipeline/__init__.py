"""Record model and the three session runners (parse, words, categorize)."""

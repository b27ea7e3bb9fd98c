# Pole/zero layouts
#
# Modules:
#   synthesis            - Geometric pole/zero placement per domain and topology

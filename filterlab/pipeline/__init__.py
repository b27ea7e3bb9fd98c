# Engine entry points
#
# Modules:
#   config               - FilterSpecification / AdaptiveSpecification dataclasses
#   engine               - compute_response, compute_pole_zero, run_adaptive_simulation
#   cli                  - argparse command-line front end

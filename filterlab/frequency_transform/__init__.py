# Frequency-domain evaluation
#
# Modules:
#   analytic_response    - Closed-form IIR/analog magnitude, phase and group delay
#   sweep                - Log-spaced frequency sweep and time-domain report
#   cache                - In-memory memoization keyed by specification hash

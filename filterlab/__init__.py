# Filter design, frequency response and adaptive-filter engine
#
# Packages:
#   fir_model            - Windows, windowed-sinc FIR design, adaptive estimators
#   frequency_transform  - Analytic magnitude/phase model, frequency sweep, result cache
#   pole_zero            - Geometric pole/zero layouts
#   pipeline             - Specifications, public engine API, command-line interface

# FIR model design and adaptive identification
#
# Modules:
#   windows              - Window weights (rectangular, hamming, hanning, blackman)
#   fir_design           - Windowed-sinc FIR design with spectral inversion
#   adaptive_filter      - LMS / NLMS / simplified RLS / scalar Kalman simulation

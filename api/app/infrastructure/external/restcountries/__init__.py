"""
Integración con REST Countries (https://restcountries.com).

Fuente única del snapshot de datos de referencia de países.
"""

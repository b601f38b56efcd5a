import pint

UNITS = pint.UnitRegistry()
Quantity = UNITS.Quantity

# pressure unit used throughout duct design (inch of water column at 68 °F)
unit_definitions = [
    'inch_water_column = 249.0889 * pascal = in_wc'
]
for ud in unit_definitions:
    UNITS.define(ud)

pint.set_application_registry(UNITS)

"""Solar System preset with DE-405 reference data.

Gravitational parameters and barycentric states (ecliptic J2000, AU and
AU/day) for the Sun, the eight planets and Pluto at TT = 0 (1 January 2000
noon) and TT = 36000 days. The Earth entry is the Earth-Moon barycenter.
"""

from typing import Dict, Tuple

from gravsim.physics.errors import ConfigurationError
from gravsim.physics.state import SystemState
from gravsim.presets.base import Preset

# GM [AU^3/day^2]
GM = {
    "Sun":      0.2959122082855911e-03,
    "Mercury":  0.4912547451450812e-10,
    "Venus":    0.7243452486162703e-09,
    "Earth":    0.8997011346712499e-09,
    "Mars":     0.9549535105779258e-10,
    "Jupiter":  0.2825345909524226e-06,
    "Saturn":   0.8459715185680659e-07,
    "Uranus":   0.1292024916781969e-07,
    "Neptune":  0.1524358900784276e-07,
    "Pluto":    0.2188699765425970e-11,
}

# Mass [kg], from the DE-405 reciprocal masses scaled by Earth + Moon = 6.04562e+24 kg
MASS_KG = {
    "Sun":      1.988407812011068e+30,
    "Mercury":  3.301028972725725e+23,
    "Venus":    4.867300877129182e+24,
    "Earth":    6.04562e+24,
    "Mars":     6.41689314388793e+23,
    "Jupiter":  1.8985157492081126e+27,
    "Saturn":   5.684579173009241e+26,
    "Uranus":   8.681873764947043e+25,
    "Neptune":  1.0243062171140825e+26,
    "Pluto":    1.470715837286293e+22,
}

INITIAL_TT = 0.0
FINAL_TT = 36000.0

INITIAL_STATE = {
    "Sun": {
        "pos": [-7.1364589399065259e-03, -2.6470228609322332e-03, -9.2294970156656141e-04],
        "vel": [+5.3784602410181226e-06, -6.7581870218649809e-06, -3.0328502580586604e-06],
    },
    "Mercury": {
        "pos": [-1.3723006195467538e-01, -4.0324074408148058e-01, -2.0141225506190355e-01],
        "vel": [+2.1371774112416420e-02, -4.9330574149022378e-03, -4.8504663531593545e-03],
    },
    "Venus": {
        "pos": [-7.2543875484147236e-01, -4.8921273467320933e-02, +2.3717693023504526e-02],
        "vel": [+8.0349602705784566e-04, -1.8498595719303294e-02, -8.3727680737444125e-03],
    },
    "Earth": {
        "pos": [-1.8429524682327703e-01, +8.8475983851898110e-01, +3.8381376140494267e-01],
        "vel": [-1.7197730582930743e-02, -2.9096002963053319e-03, -1.2615424279804276e-03],
    },
    "Mars": {
        "pos": [+1.3835794628924982e+00, -1.2458004988146892e-03, -3.7883117515271375e-02],
        "vel": [+6.7687793460626899e-04, +1.3807279375402957e-02, +6.3148674835543615e-03],
    },
    "Jupiter": {
        "pos": [+3.9940404222298844e+00, +2.7339319061545413e+00, +1.0745894287353270e+00],
        "vel": [-4.5629355212736143e-03, +5.8747037012365335e-03, +2.6292702270069392e-03],
    },
    "Saturn": {
        "pos": [+6.3992748800141177e+00, +6.1720103478444583e+00, +2.2738496033938227e+00],
        "vel": [-4.2869717425808437e-03, +3.5215864712979240e-03, +1.6388988371031218e-03],
    },
    "Uranus": {
        "pos": [+1.4424723139268364e+01, -1.2508906775795596e+01, -5.6826051942721962e+00],
        "vel": [+2.6834832774578900e-03, +2.4552472167487850e-03, +1.0373771677589703e-03],
    },
    "Neptune": {
        "pos": [+1.6804919524159171e+01, -2.2982756707473023e+01, -9.8253477507922486e+00],
        "vel": [+2.5846540556240267e-03, +1.6616650376509003e-03, +6.1578224469068194e-04],
    },
    "Pluto": {
        "pos": [-9.8824799249935378e+00, -2.7981499149074953e+01, -5.7546082780601502e+00],
        "vel": [+3.0341297634731501e-03, -1.1343428301178919e-03, -1.2681607296589918e-03],
    },
}

FINAL_STATE = {
    "Sun": {
        "pos": [+7.7442330999319582e-03, -2.8958174622971387e-03, -1.4843523935615082e-03],
        "vel": [+3.7976242804768201e-06, +6.8873739539434805e-06, +2.8328030391439036e-06],
    },
    "Mercury": {
        "pos": [+2.9998909445899702e-01, -2.5167075958321738e-01, -1.6463825444706792e-01],
        "vel": [+1.4347702925469906e-02, +1.9275892909860873e-02, +8.8151240781442156e-03],
    },
    "Venus": {
        "pos": [-1.2730466485862729e-01, -6.5678416128711048e-01, -2.8733612731354014e-01],
        "vel": [+1.9741393720748273e-02, -3.0433142723558051e-03, -2.6179095787213476e-03],
    },
    "Earth": {
        "pos": [+5.4268057037700779e-01, -7.9519201392980288e-01, -3.4479026527466322e-01],
        "vel": [+1.4350563192874279e-02, +8.2605607839611600e-03, +3.5787087909035209e-03],
    },
    "Mars": {
        "pos": [-1.3233061280808283e+00, +8.8734071813401461e-01, +4.4254312899760900e-01],
        "vel": [-7.8463585498583580e-03, -9.1754296426277467e-03, -3.9988125767134418e-03],
    },
    "Jupiter": {
        "pos": [-4.6210326953510954e+00, +2.4621350057089506e+00, +1.1674708023170912e+00],
        "vel": [-3.9185718437625807e-03, -5.6887319737186108e-03, -2.3428130677038798e-03],
    },
    "Saturn": {
        "pos": [-9.4886338896573026e+00, -3.3627229859393043e-01, +2.7058431810050654e-01],
        "vel": [-1.8651175280703436e-04, -5.1701674264839478e-03, -2.1281654055284450e-03],
    },
    "Uranus": {
        "pos": [+1.9467801910417869e+01, +4.3750090028448021e+00, +1.6411273005424660e+00],
        "vel": [-9.4602209093205781e-04, +3.3311613626557600e-03, +1.4722799034082145e-03],
    },
    "Neptune": {
        "pos": [-2.8549810690325550e+01, +8.8069648185486447e+00, +4.3155638698954348e+00],
        "vel": [-1.0362322640330788e-03, -2.7392211213405310e-03, -1.0953738661569298e-03],
    },
    "Pluto": {
        "pos": [+4.0183705547014910e+01, +2.7566070190543023e+01, -3.5042261894867393e+00],
        "vel": [-9.2786393703440592e-04, +1.7551921708389899e-03, +8.2733972886151190e-04],
    },
}


class SolarSystem(Preset):
    """The Sun, eight planets and Pluto from the DE-405 ephemeris."""

    probe = "Mercury"
    reference_body = "Earth"
    epoch = INITIAL_TT

    def __init__(self, mass_convention: str = "gm"):
        """Initialize Solar System preset.

        Args:
            mass_convention: "gm" for DE-405 gravitational parameters,
                "mass" for the equivalent masses in kg
        """
        if mass_convention not in ("gm", "mass"):
            raise ConfigurationError(f"Unknown mass convention '{mass_convention}'")
        self.mass_convention = mass_convention

    @property
    def name(self) -> str:
        return "solar_system"

    @property
    def duration(self) -> float:
        """Time between the initial and reference final states [days]."""
        return FINAL_TT - INITIAL_TT

    def generate(self) -> Tuple[Dict[str, float], SystemState]:
        masses = dict(MASS_KG if self.mass_convention == "mass" else GM)
        return masses, SystemState.from_mapping(INITIAL_STATE)

    def reference_state(self) -> SystemState:
        """Reference state at TT = 36000 days."""
        return SystemState.from_mapping(FINAL_STATE)

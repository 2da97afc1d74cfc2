from petronorm import Config, norm_samples

samples = [
    {
        "sample_id": "tholeiite",
        "SiO2": 49.5,
        "TiO2": 1.5,
        "Al2O3": 15.0,
        "Fe2O3": 2.0,
        "FeO": 8.0,
        "MnO": 0.17,
        "MgO": 8.0,
        "CaO": 11.0,
        "Na2O": 2.4,
        "K2O": 0.3,
        "P2O5": 0.15,
    },
    {
        "sample_id": "basanite_ppm",
        "SiO2": 44.0,
        "Ti": 16000.0,
        "Al2O3": 13.5,
        "FeOT": 11.5,
        "MnO": 0.2,
        "MgO": 10.5,
        "CaO": 10.8,
        "Na2O": 3.6,
        "K2O": 1.5,
        "P": 3500.0,
    },
]

config = Config(iron_mode="ferrous")
results = norm_samples(samples, config)

for result in results:
    print(result)

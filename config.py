from dataclasses import dataclass, field
from typing import Dict, Tuple


@dataclass(frozen=True)
class DatasetDescriptor:
    id: str
    name: str
    # champs utilisés pour le filtre `qs` (différents selon le schéma du dataset)
    commune_field: str
    postcode_field: str


@dataclass(frozen=True)
class Settings:
    # ADEME (Data Fair)
    ADEME_API_BASE: str = "https://data.ademe.fr/data-fair/api/v1"
    DATASETS: Tuple[DatasetDescriptor, ...] = (
        DatasetDescriptor(
            "dpe03existant",
            "DPE Logements existants (depuis juillet 2021)",
            "nom_commune_ban",
            "code_postal_ban",
        ),
        DatasetDescriptor(
            "dpe02neuf",
            "DPE Logements neufs (depuis juillet 2021)",
            "nom_commune_ban",
            "code_postal_ban",
        ),
        DatasetDescriptor(
            "dpe-france",
            "DPE Logements (avant juillet 2021)",
            "nom_commune",
            "code_postal_brut",
        ),
    )
    SORT_FIELD: str = "-date_etablissement_dpe"

    # Communes suivies (Pays-Haut lorrain)
    COMMUNES: Tuple[str, ...] = (
        "Longwy", "Mont-Saint-Martin", "Herserange", "Longlaville", "Réhon",
        "Lexy", "Cosnes-et-Romain", "Gorcy", "Haucourt-Moulaine", "Saulnes",
        "Hussigny-Godbrange", "Villerupt", "Thil", "Tiercelet", "Errouville",
        "Crusnes", "Bréhain-la-Ville", "Villers-la-Montagne", "Fillières", "Morfontaine",
        "Tucquegnieux", "Piennes", "Audun-le-Roman", "Joudreville", "Landres",
        "Trieux", "Mancieulles", "Val de Briey", "Jœuf", "Homécourt",
        "Auboué", "Longuyon", "Pierrepont", "Cutry", "Ville-Houdlémont",
        "Audun-le-Tiche", "Russange", "Rédange", "Ottange", "Aumetz",
    )
    # Communes rattachées à la Moselle, toutes les autres sont en Meurthe-et-Moselle
    MOSELLE_COMMUNES: Tuple[str, ...] = (
        "Audun-le-Tiche", "Russange", "Rédange", "Ottange", "Aumetz",
    )
    PRIMARY_DEPARTMENT: str = "54"
    ALTERNATE_DEPARTMENT: str = "57"

    # Centrage de la carte (lat, lon)
    COMMUNE_COORDS: Dict[str, Tuple[float, float]] = field(default_factory=lambda: {
        "Longwy": (49.5197, 5.7606),
        "Mont-Saint-Martin": (49.5414, 5.7814),
        "Herserange": (49.5211, 5.7906),
        "Longlaville": (49.5331, 5.8003),
        "Réhon": (49.4997, 5.7547),
        "Lexy": (49.4997, 5.7322),
        "Cosnes-et-Romain": (49.5200, 5.7150),
        "Gorcy": (49.5353, 5.6828),
        "Haucourt-Moulaine": (49.4947, 5.8042),
        "Saulnes": (49.5317, 5.8244),
        "Hussigny-Godbrange": (49.4931, 5.8622),
        "Villerupt": (49.4678, 5.9297),
        "Thil": (49.4733, 5.9056),
        "Tiercelet": (49.4675, 5.8853),
        "Errouville": (49.4122, 5.8811),
        "Crusnes": (49.4336, 5.9172),
        "Bréhain-la-Ville": (49.4428, 5.8889),
        "Villers-la-Montagne": (49.4722, 5.8253),
        "Fillières": (49.4153, 5.8250),
        "Morfontaine": (49.4503, 5.8156),
        "Tucquegnieux": (49.3103, 5.8953),
        "Piennes": (49.3100, 5.7817),
        "Audun-le-Roman": (49.3694, 5.8933),
        "Joudreville": (49.2931, 5.7797),
        "Landres": (49.3181, 5.8067),
        "Trieux": (49.3233, 5.9319),
        "Mancieulles": (49.2847, 5.8956),
        "Val de Briey": (49.2492, 5.9392),
        "Jœuf": (49.2272, 6.0119),
        "Homécourt": (49.2219, 5.9931),
        "Auboué": (49.2125, 5.9764),
        "Longuyon": (49.4422, 5.6033),
        "Pierrepont": (49.4156, 5.7114),
        "Cutry": (49.4847, 5.7297),
        "Ville-Houdlémont": (49.5406, 5.6553),
        "Audun-le-Tiche": (49.4722, 5.9544),
        "Russange": (49.4833, 5.9550),
        "Rédange": (49.4903, 5.9150),
        "Ottange": (49.4411, 6.0183),
        "Aumetz": (49.4183, 5.9444),
    })

    # Requêtes
    MAX_ROWS: int = 2000
    DEFAULT_RESULT_LIMIT: int = 2000
    REQUEST_TIMEOUT: int = 60
    # Export global : une requête à la fois, avec une pause entre chaque commune
    BULK_PAGE_SIZE: int = 1000
    BULK_DELAY_SECONDS: float = 0.15

    # Affichage
    TABLE_PAGE_SIZE: int = 50
    ALL_YEARS: str = "Toutes"
    LAST_YEAR: int = 2026
    YEAR_SPAN: int = 16
    GRADES: str = "ABCDEFG"
    PASSOIRE_GRADES: Tuple[str, ...] = ("F", "G")
    GRADE_COLORS: Dict[str, str] = field(default_factory=lambda: {
        "A": "#00a374",
        "B": "#54b45f",
        "C": "#a7c14a",
        "D": "#f2c619",
        "E": "#eb8113",
        "F": "#d13813",
        "G": "#b11313",
    })
    ADDRESS_PLACEHOLDER: str = "Adresse masquée"
    NOT_AVAILABLE: str = "N/A"

    LOG_LEVEL: str = "INFO"

    @property
    def YEARS(self) -> Tuple[str, ...]:
        return (self.ALL_YEARS,) + tuple(
            str(self.LAST_YEAR - i) for i in range(self.YEAR_SPAN)
        )

    @property
    def DEFAULT_DATASET_ID(self) -> str:
        return self.DATASETS[0].id

    def dataset(self, dataset_id: str) -> DatasetDescriptor:
        for ds in self.DATASETS:
            if ds.id == dataset_id:
                return ds
        raise ValueError(f"Dataset ADEME inconnu : {dataset_id!r}")


SETTINGS = Settings()

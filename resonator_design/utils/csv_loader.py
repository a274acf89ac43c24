import pandas as pd
from typing import List
from ..config.resonator_config import ResonatorConfig
from ..physics.constants import PhysicalConstants, DEFAULT_CONSTANTS

REQUIRED_COLUMNS = [
    'Design', 'Length Limit', 'Width Limit', 'Frequency', 'Coherence Min',
    'Anharmonicity Min', 'Conductivity Min', 'Loss Tangent Max', 'SNR Target'
]

class DesignCatalog:
    """Manages loading and validation of a CSV catalog of resonator designs."""

    def __init__(self, csv_path: str, constants: PhysicalConstants = DEFAULT_CONSTANTS):
        self.csv_path = csv_path
        self.constants = constants
        self.data = self._load_and_validate_csv()

    def _load_and_validate_csv(self) -> pd.DataFrame:
        """Load CSV and validate required columns."""
        try:
            df = pd.read_csv(self.csv_path)
        except FileNotFoundError:
            raise FileNotFoundError(f"CSV file not found at path: {self.csv_path}")
        except (pd.errors.ParserError, pd.errors.EmptyDataError, UnicodeDecodeError) as e:
            raise ValueError(f"Failed to load CSV from {self.csv_path}: {e}")

        missing_columns = [col for col in REQUIRED_COLUMNS if col not in df.columns]
        if missing_columns:
            raise ValueError(f"Missing required columns in CSV: {missing_columns}")

        df['Design'] = df['Design'].astype(str)
        return df

    @property
    def design_ids(self) -> List[str]:
        return self.data['Design'].tolist()

    def get_configuration(self, design_id: str) -> ResonatorConfig:
        """Get configuration for a specific resonator design."""
        row = self.data[self.data['Design'] == design_id]

        if row.empty:
            raise ValueError(f"Design '{design_id}' not found. Available designs: {self.design_ids}")

        return ResonatorConfig.from_csv_row(row.iloc[0], constants=self.constants)

    def get_all_configurations(self) -> List[ResonatorConfig]:
        """Get configurations for all designs in the catalog."""
        return [ResonatorConfig.from_csv_row(row, constants=self.constants) for _, row in self.data.iterrows()]

from typing import Union
from .GammaCalibrationConfig import GammaCalibrationConfig


class CalibrationDataFactory(object):
   """
    Factory for creating calibration data objects from configs.

    Dispatches to the correct ``CalibrationData`` subclass based on the
    type of config object provided.

    Methods
    -------
    create(config)
        Construct and return a ``CalibrationData`` subclass instance.

    Examples
    --------
    >>> config = GammaCalibrationConfig(
    ...     gun_values=[0, 64, 128, 192, 255],
    ...     luminance=[[0.2], [4.1], [20.0], [52.3], [101.0]],
    ... )
    >>> cal = CalibrationDataFactory.create(config)
    >>> cal.inverse_table.shape
    (256, 1)
    """

   @staticmethod
   def create(config: Union[GammaCalibrationConfig]):
      """
        Construct a ``CalibrationData`` object from a config.

        Parameters
        ----------
        config : GammaCalibrationConfig
            A validated calibration configuration.

        Returns
        -------
        CalibrationData
            A fully populated calibration data object (currently always a
            ``GammaCalibration`` instance).

        Raises
        ------
        ValueError
            If *config* is not a recognised configuration type.
       """
      from .GammaCalibration import GammaCalibration
      if isinstance(config, GammaCalibrationConfig):
         return GammaCalibration(config)

      raise ValueError(f"Unsupported calibration config: {type(config)}")

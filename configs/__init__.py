from .loader import Config, load_config, validate_config, save_resolved_config, to_link_inputs, to_radio_config, sweep_path_losses

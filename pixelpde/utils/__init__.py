from pixelpde.utils.ics import sample_image, gaussian_image, uniform_image

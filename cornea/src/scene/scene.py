from functools import reduce
from typing import Optional
import logging
import numpy as np
from numpy.typing import NDArray

from ..math.vector import Vector
from ..math.ray import Ray
from ..element.element import Element, INFINITE
from ..source.source import Light

from cornea.src.utilities.logconfig import setup_logging
logger = logging.getLogger(__name__)

# empirical lighting constants, luminance += -cos * ALIGNMENT_GAIN + AMBIENT_OFFSET
ALIGNMENT_GAIN = 200.0
AMBIENT_OFFSET = 55.0

SHADOW_BIAS = 1e-5

NO_ELEMENT = -1


class Hit:
    def __init__(self, element: Element, point: Vector, distance: float):
        self.element = element
        self.point = point
        self.distance = distance

    def __repr__(self):
        return f"Hit(element={self.element!r}, point={self.point!r}, distance={self.distance!r})"


class Scene:

    def __init__(self,
                 alignment_gain=ALIGNMENT_GAIN,
                 ambient_offset=AMBIENT_OFFSET,
                 shadow_bias=SHADOW_BIAS,
                 log_level=logging.CRITICAL,
                 log_file=None) -> None:
        setup_logging(name='cornea', level=log_level, log_file=log_file)
        self.alignment_gain = alignment_gain
        self.ambient_offset = ambient_offset
        self.shadow_bias = shadow_bias
        self.elements: dict[int, Element] = dict()
        self.lights: dict[int, Vector] = dict()

    def __iadd__(self, obj):
        if isinstance(obj, Element):
            self.add_surface(obj)
        elif isinstance(obj, Light):
            self.add_light(obj.identity, obj.position)
        else:
            raise TypeError("Only Elements and Lights can be added to Scenes!")

        return self

    def add_surface(self, element: Element):
        '''
        Insert `element` under its identity, replacing any element already stored there.
        '''
        self.elements[element.identity] = element

    def get_surface(self, identity) -> Optional[Element]:
        return self.elements.get(identity)

    def remove_surface(self, identity) -> Optional[Element]:
        return self.elements.pop(identity, None)

    def add_light(self, identity, position: Vector):
        '''
        Insert or overwrite the position of light `identity`.
        '''
        self.lights[identity] = position

    def get_light(self, identity) -> Optional[Vector]:
        return self.lights.get(identity)

    def remove_light(self, identity) -> Optional[Vector]:
        return self.lights.pop(identity, None)

    def _nearest(self, ray: Ray, omit=None):
        '''
        For every ray in the batch, the index into the returned candidate list of the closest element and the
        distance travelled to it. Index is NO_ELEMENT and distance INFINITE where nothing is hit.

        Elements whose reference position lies behind the ray origin (relative to the direction of travel)
        never count as hit, whether or not the ray crosses them geometrically. Ties go to the element added first.
        '''
        shape = ray.shape()
        direction = ray.direction()
        candidates = [element for identity, element in self.elements.items() if identity != omit]

        distances: list[NDArray[np.float64]] = []
        for element in candidates:
            # sign of the dot product is the sign of the cosine
            in_front = (element.position - ray.origin).dot(direction) >= 0
            distances.append(np.broadcast_to(np.where(in_front, element.distance(ray), INFINITE), shape))

        minimum_distances: NDArray[np.float64] = reduce(np.minimum, distances, np.full(shape, INFINITE))
        nearest_index = np.full(shape, NO_ELEMENT)

        for index, distance in enumerate(distances):
            hit = (nearest_index == NO_ELEMENT) & (minimum_distances != INFINITE) & (distance == minimum_distances)
            nearest_index = np.where(hit, index, nearest_index)

        return candidates, nearest_index, minimum_distances

    def nearest_hit(self, ray: Ray, omit=None) -> Optional[Hit]:
        '''
        Closest element intersected by a single `ray`, skipping the element whose identity is `omit`.
        '''
        if np.prod(ray.shape()) != 1:
            raise ValueError(f"nearest_hit takes a single ray, got a batch of shape {ray.shape()}.")

        candidates, nearest_index, minimum_distances = self._nearest(ray, omit)
        index = int(np.ravel(nearest_index)[0])
        if index == NO_ELEMENT:
            return None

        intersection_point = ray.origin + ray.direction().norm() * float(np.ravel(minimum_distances)[0])
        return Hit(candidates[index], intersection_point, float((intersection_point - ray.origin).magnitude()))

    def nearest_surface(self, ray: Ray, omit=None) -> Optional[Element]:
        hit = self.nearest_hit(ray, omit)
        return hit.element if hit is not None else None

    def reflected_light(self, ray: Ray):
        '''
        Luminance carried back along `ray`: 0 for the background, else the sum of the contributions of every light
        that is aligned with the mirror reflection at the hit point and reaches it unblocked.

        `ray` may be a batch, in which case an array of the batch's shape is returned, otherwise a float.
        The result is unclamped and may exceed 255 when several lights contribute.
        '''
        shape = ray.shape()
        rays = ray.flatten()
        luminance = np.zeros(rays.shape())

        candidates, nearest_index, _ = self._nearest(rays)

        for index, element in enumerate(candidates):
            hit = nearest_index == index
            if not np.any(hit):
                continue

            pixels = np.flatnonzero(hit)
            hit_rays = rays.extract(hit)

            # recompute on the element alone, the point must come from the element's own intersection
            distance = element.distance(hit_rays)
            found = distance != INFINITE
            if not np.all(found):
                logger.error(f"{element!r} was found nearest to {np.count_nonzero(~found)} rays but no longer intersects them. Shading as background.")
                if not np.any(found):
                    continue
                pixels = pixels[found]
                hit_rays = hit_rays.extract(found)
                distance = distance[found]

            incident_ray = hit_rays.direction()
            intersection_point = hit_rays.origin + incident_ray.norm() * distance
            surface_normal_at_intersection = element.compute_outward_normal(intersection_point)
            reflected_ray = incident_ray.reflect(surface_normal_at_intersection)

            for identity, source in self.lights.items():
                contribution = self._light_contribution(element, intersection_point, reflected_ray, source)
                logger.debug(f"light {identity} reaches {np.count_nonzero(contribution)} of {len(pixels)} points on element {element.identity}")
                luminance[pixels] += contribution

        if shape == ():
            return float(luminance[0])
        return luminance.reshape(shape)

    def _light_contribution(self, element: Element, intersection_point: Vector, reflected_ray: Vector, source: Vector) -> NDArray[np.float64]:
        '''
        Contribution of the light at `source` to each point of a batch on `element`, 0 where it does not reach.
        '''
        contribution = np.zeros(intersection_point.shape())
        points = np.arange(contribution.size)

        direction_from_source = intersection_point - source
        distance_to_source = direction_from_source.magnitude()

        # a light sitting exactly on the surface has no direction, its cosine is nan
        with np.errstate(divide='ignore', invalid='ignore'):
            cos_ang = direction_from_source.dot(reflected_ray) / (distance_to_source * reflected_ray.magnitude())

        # reflected ray must point back towards the light
        aligned = (distance_to_source > 0) & (cos_ang < 0)
        if not np.any(aligned):
            return contribution
        points = points[aligned]
        intersection_point = intersection_point.extract(aligned)
        direction_from_source = direction_from_source.extract(aligned)
        distance_to_source = distance_to_source[aligned]
        cos_ang = cos_ang[aligned]

        # tracing from the light must land on the same point of the same element
        light_ray = Ray(source, intersection_point)
        light_distance = element.distance(light_ray)
        reached = light_distance != INFINITE
        light_point_on_element = source + light_ray.direction().norm() * np.where(reached, light_distance, 0.0)
        intersection_point_with_standoff = intersection_point - direction_from_source.norm() * self.shadow_bias
        standoff_to_source = source - intersection_point_with_standoff
        visible = (reached
                   & light_point_on_element.approx(intersection_point)
                   & (standoff_to_source.dot(standoff_to_source) > 0))
        if not np.any(visible):
            return contribution
        points = points[visible]
        intersection_point = intersection_point.extract(visible)
        intersection_point_with_standoff = intersection_point_with_standoff.extract(visible)
        distance_to_source = distance_to_source[visible]
        cos_ang = cos_ang[visible]

        shadow_ray = Ray(intersection_point_with_standoff, source)
        _, blocker_index, blocker_distance = self._nearest(shadow_ray, omit=element.identity)
        blocked = blocker_index != NO_ELEMENT
        blocker_point = intersection_point_with_standoff + shadow_ray.direction().norm() * np.where(blocked, blocker_distance, 0.0)
        blocked &= (blocker_point - intersection_point).magnitude() < distance_to_source

        lit = ~blocked
        contribution[points[lit]] = -cos_ang[lit] * self.alignment_gain + self.ambient_offset
        return contribution
